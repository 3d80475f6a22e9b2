# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""The settings that control how a buffer-consuming generator is adapted.

Either an explicit settings object can be passed to a strategy or the
default object on this module can be changed by loading a profile.
"""

import contextlib
from enum import IntEnum, unique
from typing import Any, Optional

import attr

from arbitrary_interop.errors import InvalidArgument, InvalidState
from arbitrary_interop.internal.validation import check_type, check_valid_size
from arbitrary_interop.utils.conventions import not_set
from arbitrary_interop.utils.dynamicvariables import DynamicVariable

__all__ = ["settings"]

all_settings: "dict[str, Setting]" = {}


class settingsProperty:
    def __init__(self, name, show_default):
        self.name = name
        self.show_default = show_default

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        try:
            return obj.__dict__[self.name]
        except KeyError:
            raise AttributeError(self.name) from None

    def __set__(self, obj, value):
        obj.__dict__[self.name] = value

    def __delete__(self, obj):
        raise AttributeError(f"Cannot delete attribute {self.name}")

    @property
    def __doc__(self):
        description = all_settings[self.name].description
        default = (
            repr(getattr(settings.default, self.name))
            if self.show_default
            else "(dynamically calculated)"
        )
        return f"{description}\n\ndefault value: ``{default}``"


default_variable = DynamicVariable(None)


class settingsMeta(type):
    def __init__(cls, *args, **kwargs):
        super().__init__(*args, **kwargs)

    @property
    def default(cls):
        v = default_variable.value
        if v is not None:
            return v
        # The default is bound per thread, so a new thread starts out
        # without one until we load the current profile for it.
        if hasattr(settings, "_current_profile"):
            settings.load_profile(settings._current_profile)
            assert default_variable.value is not None
        return default_variable.value

    def _assign_default_internal(cls, value):
        default_variable.value = value

    def __setattr__(cls, name, value):
        if name == "default":
            raise AttributeError(
                "Cannot assign to the property settings.default - "
                "consider using settings.load_profile instead."
            )
        elif not (isinstance(value, settingsProperty) or name.startswith("_")):
            raise AttributeError(
                f"Cannot assign arbitrary_interop.settings.{name}={value!r} - the "
                "settings class is immutable.  You can change the global default "
                "settings with settings.load_profile, or pass a settings object "
                "to the strategy instead."
            )
        return super().__setattr__(name, value)


class settings(metaclass=settingsMeta):
    """A settings object controls how strategies size the buffers they feed
    to generators, how hard they try before giving up, and how much they
    report about it.

    Default values are picked up from the settings.default object and
    changes made there will be picked up in newly created settings.
    """

    _WHITELISTED_REAL_PROPERTIES = ["_construction_complete"]
    __definitions_are_locked = False
    _profiles: "dict[str, settings]" = {}
    __module__ = "arbitrary_interop"

    def __getattr__(self, name):
        if name in all_settings:
            return all_settings[name].default
        else:
            raise AttributeError(f"settings has no attribute {name}")

    def __init__(self, parent: Optional["settings"] = None, **kwargs: Any) -> None:
        if parent is not None and not isinstance(parent, settings):
            raise InvalidArgument(
                f"Invalid argument: parent={parent!r} is not a settings instance"
            )
        self._construction_complete = False
        defaults = parent or settings.default
        if defaults is not None:
            for setting in all_settings.values():
                if kwargs.get(setting.name, not_set) is not_set:
                    kwargs[setting.name] = getattr(defaults, setting.name)
                elif setting.validator:
                    kwargs[setting.name] = setting.validator(kwargs[setting.name])
        for name, value in kwargs.items():
            if name not in all_settings:
                raise InvalidArgument(
                    f"Invalid argument: {name!r} is not a valid setting"
                )
            setattr(self, name, value)
        self._construction_complete = True

    @classmethod
    def _define_setting(
        cls,
        name,
        description,
        default,
        options=None,
        validator=None,
        show_default=True,
    ):
        """Add a new setting.

        - name is the name of the property that will be used to access the
          setting. This must be a valid python identifier.
        - description will appear in the property's docstring
        - default is the default value.
        - options, if given, is the tuple of permitted values. Otherwise a
          validator must be given, which takes a proposed value and returns
          the value to store or raises InvalidArgument.
        """
        if settings.__definitions_are_locked:
            raise InvalidState(
                "settings have been locked and may no longer be defined."
            )
        if options is not None:
            options = tuple(options)
            assert default in options
        else:
            assert validator is not None

        all_settings[name] = Setting(
            name=name,
            description=description.strip(),
            default=default,
            options=options,
            validator=validator,
        )
        setattr(settings, name, settingsProperty(name, show_default))

    @classmethod
    def lock_further_definitions(cls):
        settings.__definitions_are_locked = True

    def __setattr__(self, name, value):
        if name in settings._WHITELISTED_REAL_PROPERTIES:
            return object.__setattr__(self, name, value)
        elif name in all_settings:
            if self._construction_complete:
                raise AttributeError(
                    "settings objects are immutable and may not be assigned to"
                    " after construction."
                )
            else:
                setting = all_settings[name]
                if setting.options is not None and value not in setting.options:
                    raise InvalidArgument(
                        f"Invalid {name}, {value!r}. Valid options: {setting.options!r}"
                    )
                return object.__setattr__(self, name, value)
        else:
            raise AttributeError(f"No such setting {name}")

    def __repr__(self):
        bits = sorted(f"{name}={getattr(self, name)!r}" for name in all_settings)
        return "settings({})".format(", ".join(bits))

    @staticmethod
    def register_profile(
        name: str, parent: Optional["settings"] = None, **kwargs: Any
    ) -> None:
        """Registers a collection of values to be used as a settings profile.

        Settings profiles can be loaded by name - for example, you might
        create a 'big' profile which starts from much larger buffers for
        generators of large structures, or a 'debug' profile which reports
        every step of every draw and shrink.

        The arguments to this method are exactly as for
        :class:`~arbitrary_interop.settings`: optional ``parent`` settings,
        and keyword arguments for each setting that will be set differently
        to parent (or settings.default, if parent is None).
        """
        check_type(str, name, "name")
        settings._profiles[name] = settings(parent=parent, **kwargs)

    @staticmethod
    def get_profile(name: str) -> "settings":
        """Return the profile with the given name."""
        check_type(str, name, "name")
        try:
            return settings._profiles[name]
        except KeyError:
            raise InvalidArgument(f"Profile {name!r} is not registered") from None

    @staticmethod
    def load_profile(name: str) -> None:
        """Loads in the settings defined in the profile provided.

        If the profile does not exist, InvalidArgument will be raised.
        Any setting not defined in the profile will be the library
        defined default for that setting.
        """
        check_type(str, name, "name")
        settings._current_profile = name
        settings._assign_default_internal(settings.get_profile(name))


@contextlib.contextmanager
def local_settings(s):
    with default_variable.with_value(s):
        yield s


@attr.s()
class Setting:
    name = attr.ib()
    description = attr.ib()
    default = attr.ib()
    options = attr.ib()
    validator = attr.ib()


def _validate_default_buffer_size(x):
    check_valid_size(x, "default_buffer_size")
    return x


settings._define_setting(
    "default_buffer_size",
    default=256,
    validator=_validate_default_buffer_size,
    description="""
The number of random bytes sampled for the first attempt at drawing a value
from a generator that does not state an upper bound on how many bytes it
needs.

Generators that do state a bound get exactly that many bytes, and
generators whose lower bound is large get twice their lower bound. If the
generator runs out of bytes the buffer is doubled and the draw retried, so
this only needs to be a reasonable guess.
""",
)


def _validate_max_buffer_size(x):
    check_valid_size(x, "max_buffer_size", minimum=1)
    return x


settings._define_setting(
    "max_buffer_size",
    default=2**16,
    validator=_validate_max_buffer_size,
    description="""
The largest buffer a strategy will ever sample. Doubling after an exhausted
draw stops at this size.
""",
)


def _validate_max_generation_attempts(x):
    check_valid_size(x, "max_generation_attempts", minimum=1)
    return x


settings._define_setting(
    "max_generation_attempts",
    default=10,
    validator=_validate_max_generation_attempts,
    description="""
How many buffers a single draw may sample before giving up with
:class:`~arbitrary_interop.errors.GenerationError`.
""",
)


@unique
class Verbosity(IntEnum):
    quiet = 0
    normal = 1
    verbose = 2
    debug = 3

    def __repr__(self):
        return f"Verbosity.{self.name}"


settings._define_setting(
    "verbosity",
    options=tuple(Verbosity),
    default=Verbosity.normal,
    description="Control the verbosity level of arbitrary-interop messages",
)

settings.lock_further_definitions()

settings.register_profile("default", settings())
settings.load_profile("default")
assert settings.default is not None
