"""Plain-text chef ops brief built from one board snapshot."""

from zoneinfo import ZoneInfo

from constants import DEFAULT_BOARD_SETTINGS, EXPORT_SHIFT_ENTRIES
from utils import now_utc, slugify

BRIEF_TIMEZONE = ZoneInfo("Europe/London")
HEAVY_RULE = "═" * 60
LIGHT_RULE = "─" * 60
DEFAULT_ADDRESS = dict(DEFAULT_BOARD_SETTINGS)["address"]


def _item_lines(items):
    lines = [f"• {i['item']}: {i['detail']}" if i.get("detail") else f"• {i['item']}" for i in items]
    return "\n".join(lines) or "None"


def _section(title, body):
    return f"{LIGHT_RULE}\n{title}\n{LIGHT_RULE}\n{body}"


def render_brief(snapshot, generated_at=None):
    settings = snapshot.get("settings", {})
    generated_at = (generated_at or now_utc()).astimezone(BRIEF_TIMEZONE)
    restaurant = settings.get("restaurant_name") or "Basil & Grape"

    notes = "\n".join(f"• {n['text']}" for n in snapshot["notes"]) or "None"
    handovers = (
        "\n".join(
            f"• {h['shift_type']}: {h['focus']}" + (f" → {h['eta']}" if h.get("eta") else "")
            for h in snapshot["shiftLog"][:EXPORT_SHIFT_ENTRIES]
        )
        or "None"
    )

    parts = [
        f"{restaurant.upper()} · CHEF OPS BRIEF\n"
        f"{settings.get('address') or DEFAULT_ADDRESS}\n"
        f"Generated: {generated_at.strftime('%d/%m/%Y, %H:%M:%S')}\n"
        f"{HEAVY_RULE}",
        f"FLOOR LEAD: {settings.get('floor_lead') or 'N/A'}\nCONTACT: {settings.get('phone') or 'N/A'}",
        _section(f"OUT OF STOCK ({len(snapshot['out'])})", _item_lines(snapshot["out"])),
        _section(f"RUNNING LOW ({len(snapshot['low'])})", _item_lines(snapshot["low"])),
        _section(f"MAINTENANCE ({len(snapshot['maint'])})", _item_lines(snapshot["maint"])),
        _section("NOTES", notes),
        _section("SHIFT HANDOVERS", handovers),
        HEAVY_RULE,
    ]
    return "\n\n".join(parts)


def brief_filename(snapshot, generated_at=None):
    generated_at = generated_at or now_utc()
    restaurant = snapshot.get("settings", {}).get("restaurant_name") or "board"
    return f"{slugify(restaurant)}-brief-{generated_at.date().isoformat()}.txt"
