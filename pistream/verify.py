import os
from typing import Iterator, Tuple


def pi_digits_spigot() -> Iterator[int]:
    q, r, t, k, n, l = 1, 0, 1, 1, 3, 3
    while True:
        if 4 * q + r - t < n * t:
            yield n
            q, r, t, k, n, l = (
                10 * q,
                10 * (r - n * t),
                t,
                k,
                ((10 * (3 * q + r)) // t) - 10 * n,
                l,
            )
        else:
            q, r, t, k, n, l = (
                q * k,
                (2 * q + r) * l,
                t * l,
                k + 1,
                (q * (7 * k + 2) + r * l) // (t * l),
                l + 2,
            )


def spigot_fractional_digits(count: int) -> str:
    g = pi_digits_spigot()
    next(g)
    return "".join(str(next(g)) for _ in range(int(count)))


def read_fractional_digits_from_text(path: str, samples: int) -> str:
    samples = int(samples)
    if samples <= 0:
        return ""
    seen_dot = False
    out = []
    with open(path, "rb") as f:
        while len(out) < samples:
            chunk = f.read(8192)
            if not chunk:
                break
            for ch in chunk.decode("ascii", errors="ignore"):
                if not seen_dot:
                    if ch == ".":
                        seen_dot = True
                    continue
                if not ch.isdigit():
                    return "".join(out)
                out.append(ch)
                if len(out) >= samples:
                    break
    return "".join(out)


def verify_output(path: str, samples: int = 1000) -> Tuple[bool, int]:
    fractional = read_fractional_digits_from_text(path, samples)
    if not fractional:
        return False, 0
    expected = spigot_fractional_digits(len(fractional))
    return fractional == expected, len(fractional)


def preview(path: str, k: int = 50) -> Tuple[str, str]:
    k = max(0, int(k))
    if k == 0:
        return "", ""
    size = os.path.getsize(path)
    with open(path, "rb") as f:
        head = f.read(k)
        f.seek(max(0, size - k - 1))
        tail = f.read()
    head_text = head.decode("ascii").rstrip("\n")
    tail_text = tail.decode("ascii").rstrip("\n")
    return head_text, tail_text[-k:]


def check_output_format(path: str, digits: int) -> bool:
    count = 0
    saw_newline = False
    with open(path, "rb") as f:
        if f.read(2) != b"3.":
            return False
        while True:
            chunk = f.read(1 << 20)
            if not chunk:
                break
            if saw_newline:
                return False
            body = chunk
            if chunk.endswith(b"\n"):
                body = chunk[:-1]
                saw_newline = True
            if body and not body.isdigit():
                return False
            count += len(body)
    return saw_newline and count == int(digits)
