"""Render planning for layered, multi-frame image documents."""
