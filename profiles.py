from collections import namedtuple

from exceptions import UnknownCompressionLevel

CompressionProfile = namedtuple('CompressionProfile', ['level', 'pdf_settings', 'image_resolution'])

# Ghostscript presets, lightest file first
COMPRESSION_PROFILES = {
    'low': CompressionProfile('low', '/screen', 72),
    'medium': CompressionProfile('medium', '/ebook', 150),
    'high': CompressionProfile('high', '/printer', 300),
}

# Names used by the original web form
LEVEL_ALIASES = {
    'little': 'low',
    'middle': 'medium',
}

DEFAULT_LEVEL = 'medium'


def available_levels():
    return list(COMPRESSION_PROFILES)


def get_profile(level=None):
    """
    Resolve a level keyword to its profile.
    Missing or blank levels fall back to DEFAULT_LEVEL.
    Raises UnknownCompressionLevel for anything else.
    """
    key = (level or '').strip().lower() or DEFAULT_LEVEL
    key = LEVEL_ALIASES.get(key, key)

    profile = COMPRESSION_PROFILES.get(key)
    if profile is None:
        raise UnknownCompressionLevel(level, available_levels())
    return profile
