import pytest

SAMPLE_LINES = [
    "101 12345678012345678011409020123A094101YOUR BANK              YOUR COMPANY                   ",
    "5200YOUR COMPANY                        1234567890PPDPAYROLL         140903   1123456780000001",
    "62212345678011232132         0000001000               ALICE WANDERDUST        1123456780000001",
    "705HERE IS SOME ADDITIONAL INFORMATION                                             00000000001",
    "627123456780234234234        0000015000               BILLY HOLIDAY           0123456780000002",
    "622123232318123123123        0000001213               RACHEL WELCH            0123456780000003",
    "820000000400370145870000000150000000000022131234567890                         123456780000001",
    "9000001000001000000040037014587000000015000000000002213                                       ",
]


def replace_at(line: str, start: int, value: str) -> str:
    """Overwrite ``line`` at 1-based position ``start`` keeping its length."""
    return line[: start - 1] + value + line[start - 1 + len(value) :]


@pytest.fixture
def sample_lines() -> list[str]:
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_ach() -> str:
    return "\n".join(SAMPLE_LINES)
