"""
Display-only heuristics for the admin analytics and report screens.

Thresholds and weights are fixed constants; every function here is pure and
takes an aggregate snapshot rather than touching the database.
"""

PENDING_RATIO_LIMIT = 0.3
PENDING_PENALTY = 20
REJECTION_RATIO_LIMIT = 0.2
REJECTION_PENALTY = 15
ENGAGEMENT_MIN_PER_USER = 2
ENGAGEMENT_PENALTY = 10

EXCELLENT_FROM = 85
GOOD_FROM = 70

AICTE_MIN_CREDITS = 20


def system_health(total_activities: int, pending: int, rejected: int, total_users: int) -> dict:
    score = 100
    issues = []

    denominator = max(total_activities or 0, 1)

    if pending / denominator > PENDING_RATIO_LIMIT:
        score -= PENDING_PENALTY
        issues.append("High number of pending activities")

    if rejected / denominator > REJECTION_RATIO_LIMIT:
        score -= REJECTION_PENALTY
        issues.append("High activity rejection rate")

    per_user = total_activities / total_users if total_users else 0
    if per_user < ENGAGEMENT_MIN_PER_USER:
        score -= ENGAGEMENT_PENALTY
        issues.append("Low user engagement")

    score = max(0, min(100, score))

    if score >= EXCELLENT_FROM:
        status = "Excellent"
    elif score >= GOOD_FROM:
        status = "Good"
    else:
        status = "Needs Attention"

    return {"score": score, "status": status, "issues": issues}


def compliance_metrics(summary: dict) -> dict:
    approved = summary.get("total_approved_activities", 0) or 0
    credits = summary.get("total_credits", 0) or 0
    departments = len(summary.get("department_breakdown") or {})

    return {
        "naac_compliance": "Compliant" if approved > 0 else "Non-Compliant",
        "nirf_score": min(100, approved),
        "aicte_requirement": "Met" if credits >= AICTE_MIN_CREDITS else "Not Met",
        "participation_rate": round(approved / departments, 2) if departments else 0
    }
