"""Line-by-line annotator for Varnish Configuration Language files."""

__version__ = "0.1.0"
