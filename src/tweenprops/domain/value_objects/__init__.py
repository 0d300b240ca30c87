from tweenprops.domain.value_objects.time_key import parse_time, format_time

__all__ = ['parse_time', 'format_time']
