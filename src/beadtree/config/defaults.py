"""
beadtree.config.defaults - Built-in configuration values.
"""

CONFIG_FILENAME = ".beadtree.toml"

ENV_PREFIX = "BEADTREE_"

DEFAULT_CONFIG = {
    "display": {
        # 0 disables truncation
        "width": 0,
        "shorten_ids": True,
        "show_depth": False,
    },
    "input": {
        "blocked_file": "",
        "deferred_file": "",
    },
}
