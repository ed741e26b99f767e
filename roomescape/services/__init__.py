"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services call repositories for DB operations and may call other services
(e.g. reservation creation calls the payment service).
"""
