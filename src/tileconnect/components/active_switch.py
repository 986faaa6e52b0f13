from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-tile occupancy flag.

    active: True if the cell currently holds a symbol; False while it is cleared/empty
    during a collapse.
    """
    active: bool = True
