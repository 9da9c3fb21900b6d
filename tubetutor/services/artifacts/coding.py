from __future__ import annotations

from typing import Any

from tubetutor.services.artifacts.base import ArtifactSpec
from tubetutor.services.extraction.blocks import PROBLEM_LABEL
from tubetutor.services.extraction.fields import ANY_LINE, CODE_FENCE, MULTI, FieldSpec
from tubetutor.services.extraction.normalize import Schema, TextRule, has_text
from tubetutor.services.llm import prompts

PROBLEMS_MAX = 3
NO_SOLUTION = "// Solution code not generated"

# Code fences are dropped; once "Solution:" is seen every other line belongs
# to the solution body, indentation preserved.
PROBLEM_FIELDS = (
    FieldSpec("code_fence", CODE_FENCE, kind="marker"),
    FieldSpec("solution", ANY_LINE, cardinality=MULTI, after="solution_marker", raw=True),
    FieldSpec("title", "Title:"),
    FieldSpec("description", "Description:", continuation=True),
    FieldSpec("sampleInput", "Sample Input:"),
    FieldSpec("sampleOutput", "Sample Output:"),
    FieldSpec("solution_marker", "Solution:", kind="marker"),
)


def _problem_schema(name: str, *, title: str, description: str, sample_input: str, sample_output: str, fallback_records) -> Schema:
    return Schema(
        name=name,
        fields={
            "title": TextRule(title),
            "description": TextRule(description),
            "sampleInput": TextRule(sample_input),
            "sampleOutput": TextRule(sample_output),
            "solution": TextRule(NO_SOLUTION, join="\n", dedent=True),
        },
        max_items=PROBLEMS_MAX,
        accept=lambda raw: has_text(raw, "title"),
        fallback_records=fallback_records,
    )


def _easy_fallback() -> list[dict[str, Any]]:
    return [
        {
            "title": "Array Sum",
            "description": "Calculate the sum of elements in an array",
            "sampleInput": "[1, 2, 3, 4]",
            "sampleOutput": "10",
            "solution": (
                "function sumArray(arr) {\n"
                "  return arr.reduce((total, num) => total + num, 0);\n"
                "}"
            ),
        }
    ]


def _medium_fallback() -> list[dict[str, Any]]:
    return [
        {
            "title": "Binary Tree Traversal",
            "description": "Implement inorder traversal of a binary tree",
            "sampleInput": "[1,null,2,3]",
            "sampleOutput": "[1,3,2]",
            "solution": (
                "class TreeNode {\n"
                "  constructor(val) {\n"
                "    this.val = val;\n"
                "    this.left = this.right = null;\n"
                "  }\n"
                "}\n"
                "\n"
                "function inorderTraversal(root) {\n"
                "  const result = [];\n"
                "  const traverse = node => {\n"
                "    if (!node) return;\n"
                "    traverse(node.left);\n"
                "    result.push(node.val);\n"
                "    traverse(node.right);\n"
                "  };\n"
                "  traverse(root);\n"
                "  return result;\n"
                "}"
            ),
        }
    ]


def _hard_fallback() -> list[dict[str, Any]]:
    return [
        {
            "title": "Traveling Salesman Problem",
            "description": "Find the shortest possible route visiting all cities exactly once",
            "sampleInput": "[[0,10,15,20],[10,0,35,25],[15,35,0,30],[20,25,30,0]]",
            "sampleOutput": "80",
            "solution": (
                "function tsp(graph) {\n"
                "  const n = graph.length;\n"
                "  const VISITED_ALL = (1 << n) - 1;\n"
                "  const dp = Array(1 << n).fill(null).map(() => Array(n).fill(-1));\n"
                "\n"
                "  function tspMask(mask, pos) {\n"
                "    if (mask === VISITED_ALL) return graph[pos][0];\n"
                "    if (dp[mask][pos] !== -1) return dp[mask][pos];\n"
                "\n"
                "    let ans = Infinity;\n"
                "    for (let city = 0; city < n; city++) {\n"
                "      if ((mask & (1 << city)) === 0) {\n"
                "        const newAns = graph[pos][city] + tspMask(mask | (1 << city), city);\n"
                "        ans = Math.min(ans, newAns);\n"
                "      }\n"
                "    }\n"
                "    return dp[mask][pos] = ans;\n"
                "  }\n"
                "\n"
                "  return tspMask(1, 0);\n"
                "}"
            ),
        }
    ]


PROBLEMS_EASY = ArtifactSpec(
    key="problems-easy",
    template=prompts.CODING_EASY_TEMPLATE,
    item_count=PROBLEMS_MAX,
    label=PROBLEM_LABEL,
    fields=PROBLEM_FIELDS,
    schema=lambda transcript: _problem_schema(
        "problems-easy",
        title="Easy Coding Challenge",
        description="Solve this beginner programming problem",
        sample_input="Test input",
        sample_output="Expected output",
        fallback_records=_easy_fallback,
    ),
    collection="problems",
)

PROBLEMS_MEDIUM = ArtifactSpec(
    key="problems-medium",
    template=prompts.CODING_MEDIUM_TEMPLATE,
    item_count=PROBLEMS_MAX,
    label=PROBLEM_LABEL,
    fields=PROBLEM_FIELDS,
    schema=lambda transcript: _problem_schema(
        "problems-medium",
        title="Intermediate Challenge",
        description="Solve this medium programming problem",
        sample_input="Complex input",
        sample_output="Expected output",
        fallback_records=_medium_fallback,
    ),
    collection="problems",
)

PROBLEMS_HARD = ArtifactSpec(
    key="problems-hard",
    template=prompts.CODING_HARD_TEMPLATE,
    item_count=PROBLEMS_MAX,
    label=PROBLEM_LABEL,
    fields=PROBLEM_FIELDS,
    schema=lambda transcript: _problem_schema(
        "problems-hard",
        title="Advanced Challenge",
        description="Solve this hard programming problem",
        sample_input="Complex input",
        sample_output="Optimized output",
        fallback_records=_hard_fallback,
    ),
    collection="problems",
)

PROBLEM_TIERS = {
    "easy": PROBLEMS_EASY,
    "medium": PROBLEMS_MEDIUM,
    "hard": PROBLEMS_HARD,
}
