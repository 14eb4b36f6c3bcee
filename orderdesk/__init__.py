"""OrderDesk: user registration, login and order search over mock fixtures."""

__version__ = "1.0.0"
