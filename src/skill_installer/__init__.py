"""Install AI coding assistant skills from a bundle, a directory, a git repository or a tarball."""

from skill_installer.config.const import VERSION as __version__

__all__ = ["__version__"]
