"""JUnit XML output - CI/CD compatible test reports."""

from __future__ import annotations

import re
from datetime import datetime

from lxml import etree

from newman_junit_full.aggregator import SuiteRecord, build_suite
from newman_junit_full.models import Trace
from newman_junit_full.properties import merge_properties
from newman_junit_full.timestamps import TimestampSequencer

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Code points XML 1.0 cannot carry, in attributes or CDATA.
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


# Stands in for "]]><![CDATA[" until serialization; lxml refuses "]]>" in
# a CDATA body, so the section is split after rendering.
_CDATA_SPLIT = chr(0xFDD0)


def _xml_safe(text: object) -> str:
    cleaned = _INVALID_XML_CHARS.sub("", "" if text is None else str(text))
    return cleaned.replace(_CDATA_SPLIT, "")


def _cdata(text: str) -> etree.CDATA:
    return etree.CDATA(_xml_safe(text).replace("]]>", "]]" + _CDATA_SPLIT + ">"))


def _seconds(value: float) -> str:
    return f"{value:.3f}"


def build_suites(trace: Trace, start: datetime | None = None) -> list[SuiteRecord]:
    """Aggregate every execution into a suite, strictly in trace order."""
    properties = merge_properties(trace.environment, trace.globals)
    sequencer = TimestampSequencer(start)
    return [build_suite(execution, trace, sequencer, properties) for execution in trace.executions]


def build_document(trace: Trace, suites: list[SuiteRecord]) -> etree._Element:
    """Compose the <testsuites> tree.

    Attribute order is fixed by the target schema, so attributes are set
    one by one in that order.
    """
    root = etree.Element("testsuites")
    if trace.collection_name:
        root.set("name", _xml_safe(trace.collection_name))
    root.set("tests", str(sum(s.tests for s in suites)))
    root.set("time", _seconds(sum(s.time for s in suites)))

    for suite in suites:
        node = etree.SubElement(root, "testsuite")
        node.set("id", str(suite.id))
        node.set("hostname", _xml_safe(suite.hostname))
        node.set("package", _xml_safe(suite.package))
        node.set("name", _xml_safe(suite.name))
        node.set("tests", str(suite.tests))
        node.set("failures", str(suite.failures))
        node.set("errors", str(suite.errors))
        node.set("timestamp", suite.timestamp)
        node.set("time", _seconds(suite.time))

        if suite.properties:
            props = etree.SubElement(node, "properties")
            for prop in suite.properties:
                p = etree.SubElement(props, "property")
                p.set("name", _xml_safe(prop.name))
                p.set("value", _xml_safe(prop.value))

        for case in suite.cases:
            testcase = etree.SubElement(node, "testcase")
            testcase.set("classname", _xml_safe(case.classname))
            testcase.set("name", _xml_safe(case.name))
            testcase.set("time", _seconds(case.time))
            if case.has_issue:
                issue = etree.SubElement(testcase, case.outcome.value)
                issue.set("type", _xml_safe(case.type))
                issue.set("message", _xml_safe(case.message))
                issue.text = _cdata(case.body)

    return root


def serialize(document: etree._Element) -> str:
    """Render with a UTF-8 declaration, 2-space indent and \\n newlines."""
    body = etree.tostring(document, pretty_print=True, encoding="unicode")
    return XML_DECLARATION + body.replace(_CDATA_SPLIT, "]]><![CDATA[")


def trace_to_junit(trace: Trace, start: datetime | None = None) -> str:
    """Convert a trace to JUnit XML text."""
    return serialize(build_document(trace, build_suites(trace, start)))
