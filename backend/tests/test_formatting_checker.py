from services.formatting_checker import PENALTIES, check_formatting


def _plain_text(words: int) -> str:
    """Digit-free filler text, ten words per line."""
    line = "Experienced engineer building reliable systems for customers across many teams"
    lines = [line] * (words // 10)
    return "\n".join(lines)


def test_clean_resume_scores_100(sample_resume):
    result = check_formatting(sample_resume)
    assert result.score == 100
    assert result.issues == []


def test_missing_contact_details():
    result = check_formatting(_plain_text(150))
    assert result.score == 100 - 15 - 5
    assert len(result.issues) == 2
    assert [i.severity for i in result.issues] == ["critical", "warning"]
    assert "email" in result.issues[0].message
    assert "phone" in result.issues[1].message


def test_page_count_over_two(sample_resume):
    result = check_formatting(sample_resume, page_count=3)
    assert result.score == 100 - PENALTIES["page_count"]
    assert "3 pages" in result.issues[0].message


def test_two_pages_is_fine(sample_resume):
    assert check_formatting(sample_resume, page_count=2).score == 100


def test_too_short_is_critical():
    result = check_formatting("jane@example.com (555) 123-4567 Python developer")
    assert result.score == 100 - PENALTIES["too_short"]
    assert result.issues[0].severity == "critical"


def test_table_layout(sample_resume):
    result = check_formatting(sample_resume + "\nSkill | Level | Years |\n")
    assert result.score == 100 - PENALTIES["table_layout"]


def test_multi_column_layout(sample_resume):
    result = check_formatting(sample_resume + "\nPython      Docker      Kubernetes\n")
    assert result.score == 100 - PENALTIES["multi_column"]


def test_mixed_date_formats(sample_resume):
    result = check_formatting(sample_resume + "\nCertified 03/2019\n")
    assert result.score == 100 - PENALTIES["date_formats"]


def test_many_special_bullets(sample_resume):
    result = check_formatting(sample_resume + "\n• one\n◦ two\n▪ three\n")
    assert result.score == 100 - PENALTIES["special_bullets"]
    assert result.issues[0].severity == "info"


def test_long_paragraph(sample_resume):
    paragraph = " ".join(["word"] * 60)
    result = check_formatting(sample_resume + "\n" + paragraph + "\n")
    assert result.score == 100 - PENALTIES["long_paragraphs"]


def test_long_bullet_is_not_a_paragraph(sample_resume):
    bullet = "- " + " ".join(["word"] * 60)
    assert check_formatting(sample_resume + "\n" + bullet + "\n").score == 100


def test_image_marker(sample_resume):
    result = check_formatting(sample_resume + "\n[Logo]\n")
    assert result.score == 100 - PENALTIES["images"]
    assert result.issues[0].severity == "critical"


def test_issue_order_follows_checks():
    result = check_formatting("[image]")
    messages = [i.message for i in result.issues]
    assert messages[0].startswith("No email")
    assert messages[-1].startswith("Image or graphic")
    assert result.score == 100 - 15 - 5 - 20 - 15
