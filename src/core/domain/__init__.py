"""Domain models and value types.

Pure data: the domain knows nothing about subprocesses, terminals or flags,
only about actions, schedules and platforms.
"""
