"""
SiteDeploy Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Deployable files (fixed, not configurable)
REQUIRED_FILES = ("index.html", "styles.css")

# Configuration file
CONFIG_FILENAME = ".env"
CONFIG_TEMPLATE_FILENAME = ".env.example"
REQUIRED_CONFIG_KEYS = ("REMOTE_USER", "REMOTE_HOST", "REMOTE_PATH")

# Defaults applied when a key is unset
DEFAULT_DEPLOY_BRANCH = "main"
DEFAULT_SSH_PORT = 22

# Git
DEFAULT_GIT_REMOTE = "origin"

# SSH Timeout Configuration
SSH_CONNECTION_TIMEOUT = 10
SSH_PROBE_PROCESS_TIMEOUT = 30

# External tools the deploy relies on
REQUIRED_TOOLS = ["git", "ssh", "rsync"]

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

CONFIG_TEMPLATE = """\
# SiteDeploy configuration
# Copy this file to .env and fill in your deployment target.

# Required
REMOTE_USER=deploy
REMOTE_HOST=example.com
REMOTE_PATH=/var/www/html

# Optional
DEPLOY_BRANCH=main
SSH_PORT=22
"""
