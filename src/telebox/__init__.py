"""Telebox cloud-storage catalog and stream link resolver."""

__version__ = "0.1.0"
