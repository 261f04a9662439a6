"""
repositories/ - Entity DAOs
===========================
One DAO per table. Each module declares its table's columns, a mapper for
its domain model, and an EntityDAO subclass wiring the two together.
"""
