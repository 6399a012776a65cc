# =============================================================================
# core/prompts.py  —  Prompt templates
# =============================================================================
#
# The code-review prompt is a fixed checklist with a single substitution:
# the submitted code, placed inside a fenced block.  No conditional logic.
# =============================================================================

CODE_REVIEW_PROMPT_NAME = "code-review"

CODE_REVIEW_TEMPLATE = """\
You are a senior developer. Review the code below against our team's code review standards.

## Code review standards

### 1. Readability
- Do variable and function names clearly convey their meaning?
- Is the code well structured?
- Is the intent of the code clear without unnecessary comments?

### 2. Maintainability
- Does it follow the single responsibility principle (SRP)?
- Is there any duplicated code?
- Is the level of abstraction appropriate?

### 3. Error handling
- Are exceptional situations handled properly?
- Are error messages useful for debugging?
- Are edge cases considered?

### 4. Performance
- Is there any unnecessary computation or memory use?
- Are there performance issues such as N+1 queries?
- Are appropriate data structures used?

### 5. Security
- Is user input validated?
- Is sensitive information kept from leaking?
- Is the code safe from injection attacks?

## Code under review

```
{code}
```

## Response format

Review each standard using the following format:

- ✅ **Pass**: items that meet the standard
- ⚠️ **Suggestion**: items worth improving (include concrete improved code)
- ❌ **Must fix**: items that must be changed (include concrete corrected code)

Finish with an overall summary and a total score (1-10)."""


def code_review_prompt(code: str) -> str:
    # replace(), not format(): the submitted code is full of braces
    return CODE_REVIEW_TEMPLATE.replace("{code}", code)
