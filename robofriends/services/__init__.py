# Services package init
"""
RoboFriends — Services Layer
==============================

Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - RobotService: list, phone-existence check and create over the robots store
"""
