"""
Services - business logic over MongoDB, the AI model and SMTP.
"""
