"""Data models for the device ACL."""

from hdcacl.models.acl import Acl

__all__ = ["Acl"]
