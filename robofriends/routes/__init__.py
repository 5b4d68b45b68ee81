# Routes package init
"""
RoboFriends — API Routes Package
==================================

Route Inventory:
    - robots.py:  GET  /api/robots                        (list)
                  GET  /api/robots/check-phone/{phone}    (phone existence)
                  POST /api/robots                        (create)
    - health.py:  GET  /                                  (liveness text)
                  GET  /health                            (store status)

Routes are thin: they extract request data, call RobotService, and let the
global exception handlers shape errors.
"""
