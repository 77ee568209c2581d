"""wls — manifest-aware directory listing for monorepo trees."""

__version__ = "0.1.0"
