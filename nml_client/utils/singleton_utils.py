"""singleton base class for process-wide helpers (logger)"""


class SingletonInstance:
    """base class for lazily created, per-class singletons"""

    _instances: dict = {}

    @classmethod
    def instance(cls, *args, **kwargs):
        """create or get the singleton instance of this class"""
        if cls not in SingletonInstance._instances:
            SingletonInstance._instances[cls] = cls(*args, **kwargs)
        return SingletonInstance._instances[cls]

    @classmethod
    def reset_instance(cls):
        """drop the singleton instance (for testing)"""
        SingletonInstance._instances.pop(cls, None)
