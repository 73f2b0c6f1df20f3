"""Work Schedules package.

Feature modules (templates, assignments, resolver, ...) sit on top of shared
core/common/database layers, with a thin Flask controller layer on top.
"""
