import re


def parse_server_version(version: str) -> tuple:
    """ Get the (major, minor, patch) tuple from a MongoDB version string

        Example: '3.4.10' -> (3, 4, 10) ; '4.0.0-rc1' -> (4, 0, 0)

        :returns: tuple, or `None` when the string does not look like a version
    """
    m = re.match(r'^\s*(\d+)\.(\d+)(?:\.(\d+))?', str(version or ''))
    if m is None:
        return None
    return tuple(int(v or 0) for v in m.groups())


def is_server_version_supported(version: str, required: tuple) -> bool:
    """ Test whether the server `version` is at least `required` """
    parsed = parse_server_version(version)
    return parsed is not None and parsed >= tuple(required)
