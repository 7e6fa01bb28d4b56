"""Loan Summary View — read-only join of loans with member and book names.

Invariants:
    - Created after, and dropped before, the tables in Base.metadata
    - loan_status is 'Returned' once return_date is set, else 'Issued'

Design Decisions:
    - Attached as DDL events on Base.metadata so create_all/drop_all in tests
      build the same view the router reads in production
"""

from sqlalchemy import DDL, event

from library_api.db.base import Base

VIEW_NAME = "loan_summary"

CREATE_LOAN_SUMMARY = DDL(f"""
CREATE VIEW {VIEW_NAME} AS
SELECT
    l.loan_id,
    m.member_id,
    m.name AS member_name,
    b.book_id,
    b.title AS book_title,
    l.issue_date,
    l.due_date,
    l.return_date,
    CASE WHEN l.return_date IS NULL THEN 'Issued' ELSE 'Returned' END AS loan_status
FROM loans l
JOIN members m ON m.member_id = l.member_id
JOIN books b ON b.book_id = l.book_id
""")

DROP_LOAN_SUMMARY = DDL(f"DROP VIEW IF EXISTS {VIEW_NAME}")

event.listen(Base.metadata, "after_create", CREATE_LOAN_SUMMARY)
event.listen(Base.metadata, "before_drop", DROP_LOAN_SUMMARY)
