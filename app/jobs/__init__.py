"""
Jobs package - background maintenance of the board
"""
from jobs.scheduler import JobScheduler

__all__ = ['JobScheduler']
