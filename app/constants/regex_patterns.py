"""
Description:
This module contains precompiled regex patterns used to clean model output and
to classify coaching chat messages.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.

Author: @kcaparas1630

"""

import re

# Compile regex patterns once for better performance
REGEX_PATTERNS = {
    'leading_fence': re.compile(r"^```(?:json)?\s*", re.IGNORECASE),
    'trailing_fence': re.compile(r"\s*```$"),
    'json_object': re.compile(r"\{.*\}", re.DOTALL),
    # "Sure! Here's a question: ..." on the first line of a generated question
    'question_preamble': re.compile(r"^.*?:\s*"),
    'non_alphanumeric': re.compile(r"[^a-z0-9\s]"),
    'whitespace': re.compile(r"\s+"),
    'interview_terms': re.compile(
        r"\b(interview|question|answer|response|transcript|feedback|score|suggestion|follow[\s-]?up|"
        r"coaching|star|situation|task|action|result|communication|pacing|improve|improvement|"
        r"behavioral|technical|resume|recruiter|hiring|job|role|mock)\b",
        re.IGNORECASE,
    ),
    'contextual_reference': re.compile(r"\b(it|this|that|answer|response|example|part)\b"),
}
