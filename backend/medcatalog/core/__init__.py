"""Core Layer — pure search logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the shell runs the
      catalog reads, the core decides what to read and how to merge it
"""
