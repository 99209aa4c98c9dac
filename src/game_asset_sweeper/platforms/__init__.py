"""Asset database platforms.

Each subpackage implements AssetDatabase for one backend and registers
itself with DatabaseRegistry on import.
"""
