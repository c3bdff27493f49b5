"""sheetsync: pack images into spritesheets and sync them to an asset host."""

__version__ = "0.1.0"
