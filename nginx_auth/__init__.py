"""nginx-auth: set up HTTP Basic Authentication for sites served by Nginx."""

__version__ = "0.1.0"
