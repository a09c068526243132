from electivas.domain.analytics import comment_analytics, comment_preview
from electivas.domain.models import Comment


def _comment(n: int, ip=None, fingerprint=None, text="Comentario de prueba") -> Comment:
    return Comment(id=f"c{n}", subject_id="81.57", text=text, timestamp=0, ip=ip, fingerprint=fingerprint)


def test_counts_unique_signals():
    analytics = comment_analytics(
        [
            _comment(1, ip="1.1.1.1", fingerprint="a"),
            _comment(2, ip="1.1.1.1", fingerprint="b"),
            _comment(3, ip="2.2.2.2"),
            _comment(4),
        ]
    )
    assert analytics.total_comments == 4
    assert analytics.unique_ips == 2
    assert analytics.unique_fingerprints == 2
    assert analytics.suspicious_patterns.same_ip_multiple_fingerprints == []


def test_flags_suspicious_patterns():
    rows = [_comment(n, ip="1.1.1.1", fingerprint=f"fp-{n}") for n in range(4)]
    rows += [_comment(10 + n, ip=f"9.9.9.{n}", fingerprint="roamer") for n in range(3)]
    rows += [_comment(20 + n, ip="3.3.3.3") for n in range(11)]

    patterns = comment_analytics(rows).suspicious_patterns

    assert patterns.same_ip_multiple_fingerprints == ["1.1.1.1"]
    assert patterns.same_fingerprint_multiple_ips == ["roamer"]
    assert patterns.high_volume_ips == ["3.3.3.3"]


def test_thresholds_are_strict():
    rows = [_comment(n, ip="1.1.1.1", fingerprint=f"fp-{n}") for n in range(3)]
    rows += [_comment(10 + n, ip=f"9.9.9.{n}", fingerprint="roamer") for n in range(2)]
    rows += [_comment(20 + n, ip="3.3.3.3") for n in range(10)]

    patterns = comment_analytics(rows).suspicious_patterns

    assert patterns.same_ip_multiple_fingerprints == []
    assert patterns.same_fingerprint_multiple_ips == []
    assert patterns.high_volume_ips == []


def test_preview_truncates_and_fills_missing_tracking():
    comment = Comment(id="c1", subject_id="81.57", text="x" * 150, timestamp=0)
    preview = comment_preview(comment)
    assert preview["text"] == "x" * 100 + "..."
    assert preview["ip"] == "N/A"
    assert preview["fingerprint"] == "N/A"
    assert preview["date"] == "1970-01-01 00:00:00 UTC"


def test_preview_keeps_short_text():
    preview = comment_preview(_comment(1, ip="1.1.1.1", fingerprint="a", text="corto pero valido"))
    assert preview["text"] == "corto pero valido"
    assert preview["ip"] == "1.1.1.1"
