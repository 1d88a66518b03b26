"""Domain layer for todovibe.

Pure models and functions: no I/O, no side effects. The flat task
collection is the only owned aggregate; trees and views are derived
from it on every read.
"""
