"""
Services Package for NerdyTips Backend.

This package holds the business logic behind the routes:
- Credential service (registration, login, token verification)
- Prediction storage and demonstration seeding
- AI-backed prediction and bet slip generation
- Subscription plan catalogue
"""
