"""Core utility functions."""

from core.utils.callbacks import NO_RESULT_MESSAGE, SdkCallback, wrap_sdk_callback
from core.utils.json_serializers import json_serializer

__all__ = ["json_serializer", "wrap_sdk_callback", "SdkCallback", "NO_RESULT_MESSAGE"]
