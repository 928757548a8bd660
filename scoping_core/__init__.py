"""
Scoping Core: training needs analysis questionnaire backend
===========================================================

Key Components:
- entities: Pydantic records for users, question sets, course outlines and messages
- datastore: Repository interfaces with Firestore and in-memory backends
- services: Entity services and the answer submission pipeline
- completion: Chat-completion client and background recommendation worker
- api: FastAPI routers, middleware and bearer-token verification
"""

__version__ = "1.0.0"
