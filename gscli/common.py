import os, yaml, typing

from os.path import join, abspath, expanduser


GSCLI_USER_CONFIG_DIR = abspath(join(expanduser("~"), ".config", "gscli"))
GSCLI_USER_CONFIG     = abspath(join(GSCLI_USER_CONFIG_DIR, "config.yaml"))


class GSException(Exception):
    pass


def file_read(filepath: str):
    try:
        with open(filepath, "r") as f:
            return f.read()
    except IOError as exc:
        raise GSException(f'Failed to read from "{filepath}": {exc}') from exc


def file_load_yaml(filepath: str):
    try:
        with open(filepath, "r") as f:
            return yaml.safe_load(f)
    except (IOError, yaml.YAMLError) as exc:
        raise GSException(f'Failed to load YAML from "{filepath}": {exc}') from exc


def has_extension(filename: str, extensions: typing.Iterable[str]) -> bool:
    """
    Returns whether filename ends with one of extensions, ignoring case.
    """

    lowered = filename.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


def env_flag(name: str) -> bool:
    """
    Returns whether the environment variable name is set to a truthy value.
    """

    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")
