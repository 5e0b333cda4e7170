"""Version information for LocaProx."""

__app_name__ = "LocaProx"
__company__ = "LocaProx"
__version__ = "1.0.0"
