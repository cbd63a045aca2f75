"""HAL implementations.

Backends are imported lazily by :mod:`zoeylocator.hal.initialization` so that
missing optional libraries only fail when selected.
"""
