"""abisync — ABI resolution and armeabi reconciliation for native-library packaging."""

__version__ = "0.1.0"
