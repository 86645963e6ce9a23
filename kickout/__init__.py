"""kickout: conveniently release a git-versioned npm package."""

__version__ = "1.0.0"

__app_name__ = "kickout"
__description__ = "Conveniently Release Git-Versioned NPM Package"
__homepage__ = "https://github.com/rse/kickout"
__author__ = "Dr. Ralf S. Engelschall"
__author_url__ = "http://engelschall.com"
__license__ = "MIT"
