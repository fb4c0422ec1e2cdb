"""tripviz: geospatial trip-analytics render plans for the NYC trips map."""

__version__ = "0.1.0"
