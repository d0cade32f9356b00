"""Build a nested outline from the flat section list."""

from dataclasses import dataclass, field

from .markdown import Section, slugify


@dataclass
class SectionNode:
    """A node in the outline tree."""
    section: Section
    children: list["SectionNode"] = field(default_factory=list)


def build_section_tree(sections: list[Section]) -> list[SectionNode]:
    """
    Build a tree structure from flat sections.

    A section's parent is the closest preceding section with a smaller
    level. Returns a list of root nodes (sections with no parent).
    """
    roots: list[SectionNode] = []
    stack: list[SectionNode] = []

    for section in sections:
        node = SectionNode(section=section)
        while stack and stack[-1].section.level >= section.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots


def node_to_dict(node: SectionNode) -> dict:
    return {
        "heading": node.section.heading,
        "level": node.section.level,
        "anchor": slugify(node.section.heading),
        "children": [node_to_dict(child) for child in node.children],
    }
