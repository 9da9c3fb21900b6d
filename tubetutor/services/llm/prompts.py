from __future__ import annotations

# Every template takes {transcript} and {count}; literal braces are doubled.

# ----------------------------
# Knowledge check quizzes
# ----------------------------

QUIZ_EASY_TEMPLATE = """Generate {count} beginner programming quiz questions based on this transcript.
Requirements:
- Focus on basic programming concepts
- Include 4 options per question
- Provide a helpful hint for each
Format EXACTLY like this:

Question 1:
Question: [Programming concept question]
Options:
A) [Option 1]
B) [Option 2]
C) [Option 3]
D) [Option 4]
Correct Answer: [Letter]
Hint: [Brief helpful hint]

Question 2:
...

Transcript: {transcript}"""

QUIZ_MEDIUM_TEMPLATE = """Generate {count} intermediate programming quiz questions based on this transcript.
Requirements:
- Focus on algorithms, data structures, and system design concepts
- Include 4 options per question
- Provide detailed technical explanations
Format EXACTLY like this:

Question 1:
Question: [Intermediate concept question]
Options:
A) [Option 1]
B) [Option 2]
C) [Option 3]
D) [Option 4]
Correct Answer: [Letter]
Explanation: [Technical explanation]

Question 2:
...

Transcript: {transcript}"""

QUIZ_HARD_TEMPLATE = """Generate {count} advanced programming quiz questions based on this transcript.
Requirements:
- Focus on complex algorithms, distributed systems, and low-level optimizations
- Include 4 challenging options per question
- Provide in-depth technical analysis
Format EXACTLY like this:

Question 1:
Question: [Complex algorithm question]
Options:
A) [Option 1]
B) [Option 2]
C) [Option 3]
D) [Option 4]
Correct Answer: [Letter]
Technical Analysis: [Detailed analysis]

Question 2:
...

Transcript: {transcript}"""

CODE_DOJO_QUIZ_TEMPLATE = """Generate {count} programming quiz questions based on this transcript.
Requirements:
- Focus on key programming concepts from the content
- Include 4 options per question
- Provide clear explanations
Format EXACTLY like this:

Question 1:
Question: [Programming concept question]
Options:
A) [Option 1]
B) [Option 2]
C) [Option 3]
D) [Option 4]
Answer: [Correct option letter]
Explanation: [Brief technical explanation]

Question 2:
...

Transcript: {transcript}"""

# ----------------------------
# Coding problems
# ----------------------------

_PROBLEM_FORMAT = """Format EXACTLY like this:

Problem 1:
Title: [Problem Name]
Description: [{description}]
Sample Input: [{sample_input}]
Sample Output: [{sample_output}]
Solution:
{solution}

Problem 2:
...

Transcript: {{transcript}}"""

CODING_EASY_TEMPLATE = """Generate {count} beginner-friendly coding problems based on this transcript.
For each problem include:
1. Title
2. Problem description
3. Sample input/output
4. Solution function
""" + _PROBLEM_FORMAT.format(
    description="2-3 sentence challenge",
    sample_input="Example input",
    sample_output="Expected output",
    solution="function exampleSolution(input) {{\n    // Implementation\n}}",
)

CODING_MEDIUM_TEMPLATE = """Generate {count} intermediate-level coding problems based on this transcript.
Requirements:
- Optimization challenges
- Edge case handling
- OOP or algorithms
For each problem include:
1. Title
2. Problem description
3. Sample input/output
4. Solution implementation
""" + _PROBLEM_FORMAT.format(
    description="Complex problem statement",
    sample_input="Challenging input",
    sample_output="Non-trivial output",
    solution="class Solution {{\n    // Implementation\n}}",
)

CODING_HARD_TEMPLATE = """Generate {count} advanced coding problems based on this transcript.
Requirements:
- Complex algorithms (DP, graphs, greedy)
- Time/space optimization challenges
- Multiple solution approaches
For each problem include:
1. Title
2. Problem description
3. Sample input/output
4. Solution implementation
""" + _PROBLEM_FORMAT.format(
    description="Advanced problem statement",
    sample_input="Complex input",
    sample_output="Optimized output",
    solution="function advancedSolution(input) {{\n    // Optimal implementation\n}}",
)

# ----------------------------
# Summaries
# ----------------------------

BRIEF_SUMMARY_TEMPLATE = """Provide a concise 200-word summary of this video transcript:

{transcript}"""

COURSE_SUMMARY_TEMPLATE = '''Analyze this video transcript and format the response EXACTLY like this:
"""
Title: [Generated Course Title]
Duration: [HH:MM:SS]
Topics: [Number] Topics
Points: [Number] Total Points
---
KEY TOPICS:
- [Topic 1]
- [Topic 2]
- [Topic...]
"""

Requirements:
1. Create a concise 5-7 word course title
2. Convert total video length to HH:MM:SS
3. Count distinct main topics
4. Generate points between 150-300 if not specified
5. List key topics as bullet points

Transcript: {transcript}'''

SECTIONS_TEMPLATE = '''Analyze this video transcript and generate 3-{count} important sections with:
1. Timestamp (HH:MM:SS)
2. Section title (5-7 words)
3. Subtitle (short phrase)
4. 20-30 word summary
5. 3 bullet point tips
Format each section EXACTLY like this:
"""
[HH:MM:SS]
Title: [Section Title]
Subtitle: [Descriptive Subtitle]
Summary: [Concise summary]
Tips:
- [Practical tip 1]
- [Practical tip 2]
- [Practical tip 3]
"""
Transcript: {transcript}'''

# ----------------------------
# JSON-mode artifacts
# ----------------------------

KEY_CONCEPTS_TEMPLATE = """Identify up to {count} key concepts taught in this video transcript.
Each transcript line starts with its start time in seconds, like [42s].

Return ONLY a JSON array, no markdown, no commentary:
[
  {{"name": "...", "timestamp": 42, "description": "...", "topic": "..."}}
]

Rules:
- name: 2-5 words
- timestamp: seconds from the start of the video where the concept is introduced
- description: one sentence on what the learner will understand
- topic: broad subject area (e.g. Physics, Mathematics, Programming)
- order concepts by timestamp

Transcript:
{transcript}"""

FORMULA_FUSION_TEMPLATE = """Build a formula derivation study module from this video transcript.
Pick up to {count} formulas or laws the video covers and derive each step by step.

Return ONLY a JSON object with this exact shape, no markdown, no commentary:
{{
  "derivations": [
    {{
      "title": "...",
      "steps": [{{"step": 1, "equation": "...", "explanation": "..."}}],
      "applications": ["...", "..."],
      "complexity": 3,
      "timeRequired": 15
    }}
  ],
  "equationDatabase": [{{"name": "...", "equations": ["...", "..."]}}],
  "categories": [{{"name": "...", "derivationCount": 4}}]
}}

Constraints:
- each derivation has 3-6 steps and at least 2 applications
- complexity is an integer 1-5, timeRequired is minutes between 5 and 60
- at most 5 categories

Transcript:
{transcript}"""
