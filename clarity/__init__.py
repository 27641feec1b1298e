"""
Clarity - ATS resume normalization and dual-format assembly

Turns text already extracted from a PDF or DOCX resume into a normalized,
section-classified, heading-standardized document that Applicant Tracking
Systems parse reliably, and renders it as plain text and as a structured
form for a rich-document writer.

Architecture:
- Intake Context: Raw document contract and text normalization
- Optimizing Context: Section classification, heading standardization,
  structural cleanup and compliance validation
- Rendering Context: Template application, dual rendering and export
"""

__version__ = "0.1.0"
