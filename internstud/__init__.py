"""
InternStud
Internship and job board for students and companies, with an AI interview simulator.

Architecture:
- MongoDB: users, announcements, applications, notifications, company reviews
- Generative AI (OpenAI-compatible API): interview questions, answer analysis, final feedback
- SMTP: contact form delivery
"""

__version__ = "1.0.0"
