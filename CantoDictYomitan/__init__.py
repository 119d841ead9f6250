"""CantoDictYomitan - builds a Yomitan dictionary from the CantoDict CSV export."""

__version__ = "1.0.0"
