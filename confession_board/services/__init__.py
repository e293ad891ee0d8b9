"""
Confession Board — Services Package
====================================

    - user_service.py:        registration and login
    - confession_service.py:  confession CRUD and atomic voting
"""
