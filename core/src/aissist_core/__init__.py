from aissist_core.config import ServerConfig, load_server_config
from aissist_core.home import RuntimePaths, prepare_paths, resolve_home

__version__ = "1.0.1"

__all__ = [
    "RuntimePaths",
    "ServerConfig",
    "__version__",
    "load_server_config",
    "prepare_paths",
    "resolve_home",
]
