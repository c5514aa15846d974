"""A small NumPy neural network for binary classification of grayscale images."""

__version__ = "0.1.0"