from django import template

from apps.core.domain.dates import format_relative
from apps.time_tracking.domain.metrics import pacing_css_class

register = template.Library()

@register.filter
def get_item(dictionary, key):
    if dictionary:
        # Obsługa kluczy string/int
        val = dictionary.get(str(key))
        if val is None:
            val = dictionary.get(int(key) if str(key).isdigit() else key)
        return val
    return None


@register.filter
def pacing_class(status):
    return pacing_css_class(status)


@register.filter
def relative_date(value):
    if not value:
        return ""
    return format_relative(value)
