"""
preproc.utilities - Small helpers shared across modules
"""
