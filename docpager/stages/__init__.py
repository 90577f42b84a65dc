"""Pipeline stages: reading, ordering, nested document lookup, pagination, writing.

Each stage is a small class exposing ``execute(inputs, context)`` and is built
from the ``pipelines[].stages`` entries of the runtime configuration.
"""
