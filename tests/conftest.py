"""Shared fixtures: a realistic extracted resume and small helpers around it."""

import pytest

from clarity.contexts.intake.document import RawDocument

# Text as a PDF extractor would hand it over: mixed bullet glyphs, a missing
# space after a bullet, an en dash, a tab-separated skills row.
SAMPLE_RESUME_TEXT = (
    "Jane Doe\n"
    "jane.doe@example.com | (555) 123-4567\n"
    "https://linkedin.com/in/janedoe\n"
    "\n"
    "PROFILE\n"
    "Backend engineer with eight years of experience building reliable data platforms "
    "and APIs for finance and healthcare clients.\n"
    "Known for pragmatic design, careful code review, and mentoring junior engineers "
    "across distributed teams.\n"
    "\n"
    "WORK HISTORY\n"
    "Senior Engineer\n"
    "Acme Corp, 2019 – Present\n"
    "▪ Led a team of four engineers delivering a payments platform used by millions of customers\n"
    "▪ Reduced batch processing time by forty percent through query tuning and caching\n"
    "◦ Introduced contract testing across twelve services\n"
    "•Mentored two interns through their first production launches\n"
    "\n"
    "Software Engineer\n"
    "Globex, 2015 - 2019\n"
    "• Built internal tooling for deployment and monitoring of services\n"
    "• Migrated legacy reports to a modern analytics stack\n"
    "\n"
    "Education\n"
    "B.S. Computer Science\n"
    "State University, 2015\n"
    "\n"
    "Technical Skills\n"
    "Python\tGo\tSQL\tKafka\n"
)


@pytest.fixture
def sample_resume_text():
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def sample_raw():
    return RawDocument.from_text(SAMPLE_RESUME_TEXT, "pdf")
