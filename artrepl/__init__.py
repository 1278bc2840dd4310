"""Manage Artifactory repository replication configurations: push, pull and multi-replication resources, validation and package layouts."""

__version__ = "0.1.0"