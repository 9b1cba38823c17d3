from .settings_dict import PaginatorSettingsDict
from .version import parse_server_version, is_server_version_supported
