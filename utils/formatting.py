"""Display helpers for report values."""


def format_inr(amount: float, symbol: bool = True) -> str:
    """
    Format an amount in Indian Rupees with Indian digit grouping.

    The last three digits form one group and the rest are grouped in pairs,
    so 1234567 renders as "₹12,34,567". Fractions are rounded to whole rupees.
    """
    rounded = int(round(abs(amount)))
    digits = str(rounded)
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ",".join(pairs + [tail])
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}{'₹' if symbol else ''}{digits}"
