"""Core domain package for smsledger.

Core contains the pattern tables, classification stages, and deduplication
logic without any storage, message-source, or verifier-runtime code, keeping
the business logic portable.
"""
