from .gitpython_client import GitPythonClient

__all__ = ["GitPythonClient"]
