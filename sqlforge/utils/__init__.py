from sqlforge.utils import logging

__all__ = ("logging",)
