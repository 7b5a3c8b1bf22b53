"""Configuration management for the folder sync application."""

from .settings import DefaultPatterns, SyncPair, SyncSettings, load_pairs

__all__ = ["DefaultPatterns", "SyncPair", "SyncSettings", "load_pairs"]
