from django.conf import settings

DEFAULTS = {
    'SPATIAL_INDEX_THRESHOLD': 500,
}


def assignment_setting(name):
    """Read a MECHANIC_ASSIGNMENT setting, falling back to the built-in default."""
    configured = getattr(settings, 'MECHANIC_ASSIGNMENT', None) or {}
    return configured.get(name, DEFAULTS[name])
