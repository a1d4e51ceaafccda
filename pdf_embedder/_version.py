__version__ = "20201014"
