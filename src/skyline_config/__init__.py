"""skyline-config - layered boarding pass configuration resolution"""

__version__ = "1.0.0"
__description__ = "Layered boarding pass configuration resolution"

__all__ = [
    "BoardingPassConfig",
    "ConfigurationResolver",
    "ConfigurationSource",
    "FieldAccessor",
    "__version__",
]


def __getattr__(name: str):
    """Lazy import so `import skyline_config` does not read .env or pull in httpx."""
    if name == "ConfigurationResolver":
        from .core.resolver import ConfigurationResolver

        return ConfigurationResolver
    if name in ("BoardingPassConfig", "ConfigurationSource"):
        from .core import schema

        return getattr(schema, name)
    if name == "FieldAccessor":
        from .field_accessor import FieldAccessor

        return FieldAccessor
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
