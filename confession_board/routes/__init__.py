"""
Confession Board — API Routes Package
======================================

Route Inventory:
    - root.py:         GET  /
    - health.py:       GET  /health-check
    - auth.py:         POST /register, POST /login
    - confessions.py:  POST /confessions, GET /confessions,
                       GET  /confessions/{id},
                       PUT  /confessions/{id}/upvote, PUT /confessions/{id}/downvote

Routes stay thin: parse the request, call a service, shape the response.
"""
