"""Top-down arcade survival shooter built on pygame: enemies, buffs and a Lich boss."""

__version__ = "0.1.0"
__all__ = ["__version__"]