from tweenprops.domain.entities.keyframe import Keyframe
from tweenprops.domain.entities.keyframes import Keyframes
from tweenprops.domain.entities.prop import Prop, CSS_TRANSFORMS
from tweenprops.domain.entities.props import Props

__all__ = [
    'Keyframe',
    'Keyframes',
    'Prop',
    'CSS_TRANSFORMS',
    'Props',
]
