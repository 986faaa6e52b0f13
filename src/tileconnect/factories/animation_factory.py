from esper import World
from tileconnect.components.animation_fade import FadeAnimation
from tileconnect.components.duration import Duration
from tileconnect.constants import MATCH_ANIMATION_DELAY
from typing import Tuple, List

class AnimationFactory:
    def __init__(self, world: World):
        self.world = world

    def create_fade_group(self, positions: List[Tuple[int,int]], duration: float = MATCH_ANIMATION_DELAY) -> List[int]:
        ents = []
        for pos in positions:
            ent = self.world.create_entity()
            self.world.add_component(ent, FadeAnimation(pos=tuple(pos)))
            self.world.add_component(ent, Duration(duration))
            ents.append(ent)
        return ents
