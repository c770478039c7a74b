"""Adapters that connect the core pipeline to files, storage, and verifiers."""
