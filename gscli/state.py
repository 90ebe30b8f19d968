import os, typing, dataclasses
from functools import lru_cache

import fastjsonschema

from .common import GSException, GSCLI_USER_CONFIG, file_load_yaml, env_flag


CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "scan_depth":         {"type": "integer", "minimum": 1},
        "tabular_extensions": {"type": "array", "items": {"type": "string", "pattern": "^\\."}},
        "primary_input":      {"type": "string", "minLength": 1},
        "debug":              {"type": "boolean"},
    },
    "additionalProperties": False,
}


@dataclasses.dataclass
class GSConfig:
    scan_depth:         int                 = 100
    tabular_extensions: typing.List[str]    = dataclasses.field(default_factory=lambda: [".tsv", ".csv"])
    primary_input:      str                 = "Argv"
    debug:              bool                = False

    @staticmethod
    def from_dict(d: dict):
        """ Create a GSConfig object from a dictionary whose keys are a subset
            of the fields of GSConfig. Missing keys keep their defaults. """
        r = GSConfig()

        for field in dataclasses.fields(GSConfig):
            if field.name in d:
                setattr(r, field.name, d[field.name])

        return r

    def items(self) -> typing.Iterable[typing.Tuple[str, typing.Any]]:
        return dataclasses.asdict(self).items()

    def __str__(self) -> str:
        """ Returns a string like "scan_depth=100 & primary_input=Argv & debug=No" """
        strings = []
        for k, v in self.items():
            if isinstance(v, bool):
                strings.append(f"{k}={'Yes' if v else 'No'}")
            elif isinstance(v, list):
                strings.append(f"{k}={','.join(v)}")
            else:
                strings.append(f"{k}={v}")

        return ' & '.join(strings)


@lru_cache(maxsize=1)
def _get_config_validator():
    return fastjsonschema.compile(CONFIG_SCHEMA)


def validate_config(data: dict, source: str = "<config>") -> None:
    try:
        _get_config_validator()(data)
    except fastjsonschema.JsonSchemaException as exc:
        raise GSException(f'Invalid configuration in "{source}": {exc.message}') from exc


def load_config(filepath: str = None) -> GSConfig:
    """
    Load the user configuration.

    The file is looked up in order: the explicit filepath, $GSCLI_CONFIG,
    then ~/.config/gscli/config.yaml. A missing default file yields the
    built-in defaults. $GSCLI_DEBUG=1 forces debug output on.
    """
    if filepath is None:
        filepath = os.environ.get("GSCLI_CONFIG")
        if filepath is None and os.path.isfile(GSCLI_USER_CONFIG):
            filepath = GSCLI_USER_CONFIG

    data = {}
    if filepath is not None:
        data = file_load_yaml(filepath) or {}
        if not isinstance(data, dict):
            raise GSException(f'Invalid configuration in "{filepath}": expected a mapping')
        validate_config(data, filepath)

    config = GSConfig.from_dict(data)
    if env_flag("GSCLI_DEBUG"):
        config.debug = True

    return config
