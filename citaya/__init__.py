"""citaya-media: image upload proxy to the ImageKit CDN plus database keep-alive."""

__version__ = "1.0.0"
