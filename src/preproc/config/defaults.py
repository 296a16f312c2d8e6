"""
preproc.config.defaults - Built-in configuration values
"""

CONFIG_FILENAME = ".preproc.toml"

ENV_PREFIX = "PREPROC_"

DEFAULT_CONFIG = {
    "preprocess": {
        # Directives are lines starting with <comment>&
        "comment": "//",
        # Directories searched for <global> includes, in order
        "include_paths": [],
        # Suffix of the output file when none is given
        "output_suffix": ".i",
        "encoding": "utf-8",
    },
    "depfile": {
        "strip_prefix": "",
    },
}
