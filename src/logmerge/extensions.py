"""
Named factories for pluggable components.

A registry is created per extensible interface; implementations register a
factory under a name and are later constructed by that name, e.g. from a
command line option::

    @register(LogSink, "stream")
    class StreamSink(implements(LogSink)):
        ...

    sink = load(LogSink, "stream", stream=fp)
"""
from toolz import curry


class Registry:
    """
    Responsible for managing the factories registered for a given interface.
    Only one instance should exist per interface, created through
    ``create_registry``.

    Parameters
    ----------
    interface : type
        The interface to manage.
    """

    def __init__(self, interface):
        self.interface = interface
        self._factories = {}

    @property
    def names(self):
        return sorted(self._factories)

    def load(self, name, **kwargs):
        """Construct an object from a registered factory.

        Parameters
        ----------
        name : str
            Name with which the factory was registered.
        **kwargs
            Forwarded to the factory.
        """
        try:
            factory = self._factories[name]
        except KeyError as exc:
            raise ValueError(
                "no %s factory registered under name %r, options are: %r"
                % (self.interface.__name__, name, self.names),
            ) from exc
        return factory(**kwargs)

    def is_registered(self, name):
        """Check whether we have a factory registered under ``name``."""
        return name in self._factories

    @curry
    def register(self, name, factory):
        if self.is_registered(name):
            raise ValueError(
                "%s factory with name %r is already registered"
                % (self.interface.__name__, name)
            )

        self._factories[name] = factory

        return factory

    def unregister(self, name):
        try:
            del self._factories[name]
        except KeyError as exc:
            raise ValueError(
                "%s factory %r was not already registered"
                % (self.interface.__name__, name)
            ) from exc


def get_registry(interface):
    """
    Getter method for retrieving the registry instance for a given
    extensible interface.

    Parameters
    ----------
    interface : type
        The extensible interface.

    Returns
    -------
    registry : Registry
        The corresponding registry.
    """
    try:
        return custom_types[interface]
    except KeyError as exc:
        raise ValueError("class specified is not an extensible type") from exc


def load(interface, name, **kwargs):
    """Construct the object registered under ``name`` for ``interface``."""
    return get_registry(interface).load(name, **kwargs)


@curry
def register(interface, name, factory):
    """
    Register a factory for retrieval by ``load``. Curried, so it may be used
    as a decorator.

    Parameters
    ----------
    interface : type
        The interface the factory produces implementations of.
    name : str
        The name to register under.
    factory : callable
        Callable producing the implementation.
    """
    return get_registry(interface).register(name, factory)


def unregister(interface, name):
    """Remove the factory registered under ``name`` for ``interface``."""
    get_registry(interface).unregister(name)


def create_registry(interface):
    """
    Create a new registry for an extensible interface.

    Parameters
    ----------
    interface : type
        The interface for which to create a registry.

    Returns
    -------
    interface : type
        The interface, unaltered.
    """
    if interface in custom_types:
        raise ValueError(
            "there is already a Registry instance for the specified type"
        )
    custom_types[interface] = Registry(interface)
    return interface


extensible = create_registry

# A global dictionary for storing instances of Registry:
custom_types = {}
