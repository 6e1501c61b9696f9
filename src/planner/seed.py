"""
Canonical default data: the initial weekday/weekend schedule and the daily checklist.
"""
from __future__ import annotations

from typing import Any, Dict, List

_SCHEDULES = (
    # Weekday
    ("weekday", "5:00 AM - 5:15 AM", "Wake Up & Prepare", "personal", {}),
    ("weekday", "5:15 AM - 7:15 AM (2h)", "Study Block 1: DSA", "dsa", {}),
    ("weekday", "7:15 AM - 8:15 AM (1h)", "Study Block 2: Aptitude (Part 1)", "aptitude", {}),
    ("weekday", "8:15 AM - 9:00 AM", "Breakfast & Commute", "personal", {}),
    ("weekday", "9:00 AM - 5:00 PM (8h)", "Class Time", "class", {}),
    ("weekday", "5:00 PM - 6:30 PM", "Commute Home & Dinner", "personal", {}),
    ("weekday", "6:30 PM - 10:30 PM (4h)", "Study Block 3: Development", "dev", {}),
    ("weekday", "10:30 PM - 11:30 PM (1h)", "Study Block 4: Aptitude (Part 2)", "aptitude", {}),
    ("weekday", "11:30 PM - 5:00 AM", "Sleep (5 hours)", "personal", {"isWarning": True}),
    # Weekend
    ("weekend", "8:00 AM - 9:00 AM", "Wake Up & Breakfast", "personal", {}),
    ("weekend", "9:00 AM - 1:00 PM (4h)", "Morning Study: Development", "dev", {}),
    ("weekend", "1:00 PM - 2:00 PM", "Lunch Break", "personal", {}),
    ("weekend", "2:00 PM - 4:00 PM (2h)", "Afternoon Study: DSA", "dsa", {}),
    ("weekend", "4:00 PM - 6:00 PM (2h)", "Afternoon Study: Aptitude", "aptitude", {}),
    ("weekend", "6:00 PM onwards", "Critical Free Time & Recovery", "personal", {"isSuccess": True}),
    ("weekend", "11:00 PM", "Sleep (Aim for 8-9 hours)", "personal", {}),
)

_CHECKLIST = (
    "Complete 2 DSA problems",
    "Review Aptitude concepts",
    "Code for 1 hour on project",
    "Plan tomorrow's study blocks",
)


# PUBLIC_INTERFACE
def initial_schedules() -> List[Dict[str, Any]]:
    """
    Return fresh copies of the 16 default schedule documents (without ids).
    Orders restart at 0 for each schedule type.
    """
    docs: List[Dict[str, Any]] = []
    counters: Dict[str, int] = {}
    for schedule_type, time, description, category, flags in _SCHEDULES:
        order = counters.get(schedule_type, 0)
        counters[schedule_type] = order + 1
        docs.append(
            {
                "type": schedule_type,
                "time": time,
                "description": description,
                "category": category,
                "isWarning": flags.get("isWarning", False),
                "isSuccess": flags.get("isSuccess", False),
                "order": order,
            }
        )
    return docs


# PUBLIC_INTERFACE
def initial_checklist() -> List[Dict[str, Any]]:
    """Return fresh copies of the 4 default checklist documents, all uncompleted."""
    return [{"text": text, "completed": False} for text in _CHECKLIST]
