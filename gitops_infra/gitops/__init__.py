"""
GitOps Module
ArgoCD AppProject and Application
"""

from .functions import create_app_project, create_application

__all__ = ["create_app_project", "create_application"]
