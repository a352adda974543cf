import numpy as np


# static class
class Backend:
    _current_api = np  # default
    _api_name = np.__name__
    _real_dtype = "float64"
    _complex_dtype = "complex128"

    @classmethod
    def set_api(cls, module, real_dtype="float64", complex_dtype="complex128"):
        """Set xp backend: any numpy-compatible namespace (numpy, cupy, ...)."""
        for attr in ("asarray", "eye", "exp", "linalg"):
            if not hasattr(module, attr):
                raise ValueError(f"Backend module '{module.__name__}' has no attribute '{attr}'")
        cls._current_api = module
        cls._api_name = module.__name__
        cls._real_dtype = real_dtype
        cls._complex_dtype = complex_dtype

    @classmethod
    def api_name(cls):
        return cls._api_name

    @classmethod
    def xp(cls):
        """Return the current array API namespace."""
        return cls._current_api

    @classmethod
    def real_dtype(cls):
        xp = cls._current_api
        return getattr(xp, cls._real_dtype, cls._real_dtype)

    @classmethod
    def complex_dtype(cls):
        xp = cls._current_api
        return getattr(xp, cls._complex_dtype, cls._complex_dtype)

    @classmethod
    def from_device(cls, arr):
        """Pull array back to CPU (NumPy)."""
        if "cupy" in cls._api_name:
            import cupy as cp
            return cp.asnumpy(arr)
        return np.asarray(arr)


# default is Numpy
Backend.set_api(np)
