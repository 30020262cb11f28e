"""
Configuration of merge runs.

Values are read from ``LOGMERGE_*`` environment variables and may be
overridden by ``key=value`` strings, such as those passed to the command
line's ``-x`` option::

    LOGMERGE_BATCH_SIZE=8 logmerge -x mode=sync merge a.log b.log
"""
import os
import re
from collections import namedtuple

from logmerge.errors import InvalidConfig, InvalidBatchSize, UnknownConfigKey
from logmerge.refill import DEFAULT_BATCH_SIZE, RefillPolicy

ENVIRON_PREFIX = "LOGMERGE_"

MODES = ("sync", "async")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _parse_batch_size(value):
    try:
        batch_size = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfig(
            key="batch_size",
            value=value,
            reason="not an integer",
        ) from exc
    try:
        RefillPolicy(batch_size)
    except InvalidBatchSize as exc:
        raise InvalidConfig(
            key="batch_size",
            value=value,
            reason="must be at least 1",
        ) from exc
    return batch_size


def _parse_mode(value):
    mode = str(value).lower()
    if mode not in MODES:
        raise InvalidConfig(
            key="mode",
            value=value,
            reason="must be one of %s" % ", ".join(MODES),
        )
    return mode


def _parse_bool(key):
    def parse(value):
        if isinstance(value, bool):
            return value
        text = str(value).lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise InvalidConfig(key=key, value=value, reason="not a boolean")

    return parse


def _parse_log_level(value):
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise InvalidConfig(
            key="log_level",
            value=value,
            reason="must be one of %s" % ", ".join(LOG_LEVELS),
        )
    return level


_PARSERS = {
    "batch_size": _parse_batch_size,
    "mode": _parse_mode,
    "check_order": _parse_bool("check_order"),
    "log_level": _parse_log_level,
}


class MergeConfig(namedtuple("MergeConfig", "batch_size mode check_order log_level")):
    """Settings for a merge run.

    Parameters
    ----------
    batch_size : int, optional
        Pulls per refill in asynchronous merges.
    mode : {'sync', 'async'}, optional
        Which driver to run.
    check_order : bool, optional
        Whether to verify the delivered order with a CheckedSink.
    log_level : str, optional
        Level of the handler installed by the command line.
    """

    __slots__ = ()

    def __new__(
        cls,
        batch_size=DEFAULT_BATCH_SIZE,
        mode="async",
        check_order=False,
        log_level="INFO",
    ):
        return super(MergeConfig, cls).__new__(
            cls,
            _PARSERS["batch_size"](batch_size),
            _PARSERS["mode"](mode),
            _PARSERS["check_order"](check_order),
            _PARSERS["log_level"](log_level),
        )

    def replace(self, **kwargs):
        """Copy of this config with the given values replaced. ``None``
        values are ignored, so unset command line options can be passed
        straight through.
        """
        unknown = set(kwargs) - set(self._fields)
        if unknown:
            raise UnknownConfigKey(
                key=sorted(unknown)[0],
                valid_keys=", ".join(self._fields),
            )
        updates = {k: v for k, v in kwargs.items() if v is not None}
        return type(self)(**dict(self._asdict(), **updates))


def parse_config_arg(arg):
    """
    Split a ``key=value`` string.

    Parameters
    ----------
    arg : str
        The string to parse.

    Returns
    -------
    key, value : str
        The two halves.
    """
    match = re.match(r"^([^\d\W]\w*)=(.*)$", arg)
    if match is None:
        raise ValueError(
            "invalid configuration argument '%s', must be in key=value form" % arg
        )
    return match.group(1), match.group(2)


def environ_values(environ=None):
    """The configuration values set in the environment.

    For testing purposes, this accepts a dictionary to interpret as the os
    environment.

    Parameters
    ----------
    environ : dict, optional
        A dict to interpret as the os environment.

    Returns
    -------
    values : dict[str, str]
        Raw values keyed by configuration key.
    """
    if environ is None:
        environ = os.environ

    values = {}
    for key in MergeConfig._fields:
        name = ENVIRON_PREFIX + key.upper()
        if name in environ:
            values[key] = environ[name]
    return values


def load_config(environ=None, overrides=()):
    """Build the configuration for a run.

    Parameters
    ----------
    environ : dict, optional
        A dict to interpret as the os environment.
    overrides : iterable[str], optional
        ``key=value`` strings applied on top of the environment.

    Returns
    -------
    config : MergeConfig
    """
    values = environ_values(environ)
    for arg in overrides:
        key, value = parse_config_arg(arg)
        if key not in MergeConfig._fields:
            raise UnknownConfigKey(
                key=key,
                valid_keys=", ".join(MergeConfig._fields),
            )
        values[key] = value

    return MergeConfig(**values)
