"""SiteDeploy - git-gated rsync deployment for a static site."""

__version__ = "1.0.0"
