import enum
# =========================================================
# ENUMS
# =========================================================
class DeliveryStatus(str, enum.Enum):
    ok = "ok"
    invalid = "invalid"   # push service says the endpoint is gone for good
    error = "error"       # transient, retried on a later window

class EntryOutcome(str, enum.Enum):
    outside_window = "outside_window"
    already_sent = "already_sent"
    skipped = "skipped"
    sent = "sent"
    failed = "failed"
    pruned = "pruned"
    error = "error"
    gone = "gone"
