"""Gunicorn configuration for HistoryBlock production deployment."""

# Server socket
bind = '127.0.0.1:8000'

# A single worker: pattern mutations are serialized by an in-process lock
workers = 1
worker_class = 'gthread'
threads = 4

# Timeout
timeout = 30

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'
