from ui_resolvers.services.file_references import FileUrlCache
from ui_resolvers.services.files_provider import FileAccessProvider, get_files_provider

_file_url_cache = FileUrlCache()


def get_provider() -> FileAccessProvider:
    return get_files_provider()


def get_file_url_cache() -> FileUrlCache:
    return _file_url_cache
