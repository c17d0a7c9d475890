# Course Planner - turn a scraped curriculum and raw videos into a Master Plan
"""
Course Planner matches a scraped course curriculum against a folder of raw
lesson videos by duration, checks the numbered slide images on disk, and
writes a Master Plan JSON for the downstream editing automation.
"""

__version__ = "0.1.0"
