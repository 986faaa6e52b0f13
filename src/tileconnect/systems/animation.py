from esper import World

from tileconnect.components.animation_fade import FadeAnimation
from tileconnect.components.duration import Duration
from tileconnect.events.bus import (EVENT_TICK, EventBus, EVENT_ANIMATION_START, EVENT_ANIMATION_COMPLETE,
                                    EVENT_SESSION_RESET)
from tileconnect.factories.animation_factory import AnimationFactory


def cancel_animations(world: World) -> None:
    """Drop every running fade without emitting a completion event."""
    for ent in [ent for ent, _ in world.get_component(FadeAnimation)]:
        world.delete_entity(ent, immediate=True)


class AnimationSystem:
    """Drives timing of animations from the external frame tick.

    A fade group started with EVENT_ANIMATION_START(kind='fade') completes once its
    Duration has elapsed, at which point EVENT_ANIMATION_COMPLETE is emitted with the
    faded positions. This is the one-shot deferred callback that applies a match.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.factory = AnimationFactory(world)
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)
        event_bus.subscribe(EVENT_SESSION_RESET, self.on_session_reset)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind'); items = kwargs.get('items', [])
        if kind == 'fade' and items:
            self.factory.create_fade_group(items)

    def on_session_reset(self, sender, **kwargs):
        cancel_animations(self.world)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        fades = list(self.world.get_component(FadeAnimation))
        if not fades:
            return
        for ent, fade in fades:
            if fade.alpha > 0.0:
                d = self.world.component_for_entity(ent, Duration)
                fade.alpha -= dt / d.value
                if fade.alpha < 0.0:
                    fade.alpha = 0.0
        if all(fade.alpha <= 0.0 for _, fade in fades):
            positions = [fade.pos for _, fade in fades]
            for ent, _ in fades:
                self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='fade', items=positions)
