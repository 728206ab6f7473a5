"""
Review prompt template for the LLM.

Kept in its own module so the wording can be iterated on without touching
the review pipeline.
"""

REVIEW_PROMPT = """Please analyze this GitHub Pull Request and provide a detailed review:

Title: {title}
Description: {description}
Files Changed: {changed_files}
Additions: {additions}
Deletions: {deletions}

Please provide a structured analysis including:
1. Summary of Changes:
   - Brief overview of what this PR does
   - Main components affected

2. Code Impact Analysis:
   - Scope of changes
   - Potential risks
   - Areas needing attention

3. Best Practices Review:
   - Code quality assessment
   - Adherence to standards
   - Suggestions for improvement

4. Security Considerations:
   - Potential security implications
   - Data handling concerns
   - Authentication/authorization impacts

5. Testing Recommendations:
   - Areas that should be tested
   - Suggested test cases
   - Edge cases to consider

6. Final Recommendation:
   - Overall assessment
   - Whether to approve or request changes
   - Specific points to address before merging

Please format the response in clear sections with bullet points where appropriate.
"""

NO_DESCRIPTION = "No description provided"
