"""trackview - frame-safe vector math and a trackball camera controller."""

__version__ = "0.1.0"
