"""
Services Module

Business logic behind the HTTP routers:
- store: Persistent storage of users, sessions and orders (Tortoise ORM)
- sessions: Issue, resolve and revoke login sessions
- identity: Registration, login, logout and current-user lookup
- orders: Order placement and listing for the signed-in user
"""
