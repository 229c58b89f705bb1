"""Sample agent output for running without a real review."""

MOCK_FINDINGS = """```json
{
  "findings": [
    {
      "category": "performance",
      "severity": "medium",
      "title": "N+1 query when listing orders",
      "locations": ["orders/views.py:27"],
      "description": "Each order triggers a separate query for its customer inside the loop.",
      "fix": {
        "text": "Fetch customers together with the orders.",
        "code": {"code": "Order.objects.select_related(\\"customer\\")", "language": "python"}
      }
    },
    {
      "category": "security",
      "severity": "critical",
      "title": "SQL injection in user lookup",
      "locations": ["accounts/db.py:42"],
      "description": {
        "text": "The user id is concatenated into the SQL string.",
        "code": {"code": "query = \\"SELECT * FROM users WHERE id = \\" + user_id", "language": "python"}
      },
      "fix": {
        "text": "Use a parameterised query.",
        "code": {"code": "cursor.execute(\\"SELECT * FROM users WHERE id = %s\\", (user_id,))", "language": "python"}
      }
    },
    {
      "category": "security",
      "severity": "medium",
      "title": "Open redirect after login",
      "locations": ["accounts/views.py:88"],
      "description": "The next parameter is used as the redirect target without checking its host."
    }
  ],
  "summary": "3 issues found"
}
```"""
