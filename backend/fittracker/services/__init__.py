"""
Services module - Application business logic layer.

Modules:
- analytics: Coaching engine, per-session strategies, adapters and stores
"""
