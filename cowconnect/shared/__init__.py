"""Shared utilities and logging used across layers."""
