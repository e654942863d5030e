"""
Test data generators for JECS parsing benchmarks.

Builds Python payloads of various shapes and writes each one twice: as a
JECS document for jecs and as JSON for the JSON libraries it is compared
against. Both texts describe the same data.
- Different sizes (small/medium/large)
- Different complexity levels (simple/nested/mixed)
- String-heavy content with escape sequences
"""

import json
import random
import re
import string
from typing import Any

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
]

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3

_BARE_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def generate_test_data(data_type: str) -> dict[str, Any]:
    """Generates a benchmark payload of the specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def generate_documents(data_type: str) -> tuple[str, str]:
    """Returns the JECS and JSON renderings of one generated payload."""
    data = generate_test_data(data_type)
    return to_jecs(data), json.dumps(data)


def to_jecs(data: dict[str, Any]) -> str:
    """
    Writes a payload as a JECS document.

    Maps and lists holding containers become indented blocks; lists of
    scalars are written inline. Scalars use their JSON spelling, which
    JECS reads the same way.
    """
    lines: list[str] = []
    _write_block(data, 0, lines)
    return "\n".join(lines) + "\n"


def _write_block(obj: dict | list, indent: int, lines: list[str]) -> None:
    pad = " " * indent
    if isinstance(obj, dict):
        entries = [(f"{pad}{_key(key)}:", value) for key, value in obj.items()]
    else:
        entries = [(f"{pad}-", item) for item in obj]

    for head, value in entries:
        if isinstance(value, dict | list) and value and not _is_flat(value):
            lines.append(head)
            _write_block(value, indent + 2, lines)
        else:
            lines.append(f"{head} {json.dumps(value, ensure_ascii=False)}")


def _key(key: str) -> str:
    if _BARE_KEY.fullmatch(key) and key not in ("true", "false", "null"):
        return key
    return json.dumps(key, ensure_ascii=False)


def _is_flat(value: dict | list) -> bool:
    return isinstance(value, list) and not any(
        isinstance(item, dict | list) for item in value
    )


def _generate_small_object() -> dict[str, Any]:
    """Generates a small payload (< 1KB), shaped like a mod manifest."""
    return {
        "ID": "AliceMod",
        "Name": "Alice's Mod",
        "Author": "alice@example.com",
        "Enabled": True,
        "Priority": 12,
        "Scale": 1234.56,
        "Tags": ["ui", "audio", "maps"],
        "Metadata": {"Created": "2024-01-15T10:30:00Z", "Source": "api"},
    }


def _generate_large_object() -> dict[str, Any]:
    """Generates a large payload (> 10KB) with many fields."""
    phone = "-".join(
        [
            "+1",
            str(random.randint(100, 999)),
            str(random.randint(100, 999)),
            str(random.randint(1000, 9999)),
        ]
    )
    return {
        "user_id": random.randint(1000000, 9999999),
        "profile": {
            "personal": {
                "first_name": _random_string(10),
                "last_name": _random_string(12),
                "email": f"{_random_string(8)}@{_random_string(6)}.com",
                "phone": phone,
                "address": {
                    "street": f"{random.randint(1, 9999)} "
                    f"{_random_string(8)} St",
                    "city": _random_string(12),
                    "state": _random_string(2).upper(),
                    "zip": f"{random.randint(10000, 99999)}",
                    "country": "US",
                },
            },
            "preferences": {
                "language": random.choice(["en", "es", "fr", "de", "zh"]),
                "timezone": random.choice(
                    [
                        "America/New_York",
                        "Europe/London",
                        "Asia/Tokyo",
                        "Australia/Sydney",
                    ]
                ),
                "notifications": {
                    "email": random.choice([True, False]),
                    "sms": random.choice([True, False]),
                    "push": random.choice([True, False]),
                },
            },
        },
        # Transaction history
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": _random_timestamp(),
                "description": f"Payment for {_random_string(20)}",
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        # Activity log
        "activity_log": [
            {
                "timestamp": _random_timestamp(),
                "action": random.choice(
                    ["login", "logout", "purchase", "view", "update"]
                ),
                "ip_address": ".".join(
                    str(random.randint(1, 255)) for _ in range(4)
                ),
                "user_agent": f"Mozilla/5.0 ({_random_string(20)})",
            }
            for _ in range(30)
        ],
    }


def _generate_mixed_array() -> dict[str, Any]:
    """Generates a long list with mixed data types under one key."""
    items: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            items.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            items.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            items.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            items.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            items.append(None)
        else:
            items.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return {"items": items}


def _generate_nested_structure() -> dict[str, Any]:
    """Generates a deeply nested payload."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "nested": create_nested_dict(depth - 1),
        }

    return create_nested_dict(6)


def _generate_string_heavy() -> dict[str, Any]:
    """Generates strings that need escape sequences when quoted."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice('"\\/\b\f\n\r\t'))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "unicode": [
            f"Unicode: {chr(random.randint(0x00A0, 0x07FF))}"
            for _ in range(50)
        ],
        "mixed_content": {
            f"key_{i}": {
                "description": create_escaped_string(),
                "content": 'Content with \n newlines \t tabs and " quotes',
                "path": f"C:\\Users\\{_random_string(8)}\\file_{i}.txt",
            }
            for i in range(20)
        },
    }


def _random_timestamp() -> str:
    return (
        f"2024-{random.randint(1, 12):02d}-{random.randint(1, 28):02d}"
        f"T{random.randint(0, 23):02d}:{random.randint(0, 59):02d}:00Z"
    )


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
