import random

import pytest

from vibepay.domain.element import Document, Element
from vibepay.models.animation import AnimationSettings
from vibepay.tasks.animation_timers import AnimationController
from vibepay.ui.page import PAGE_ELEMENT_IDS


def _el(parent: Element, element_id=None, tag="div", classes=(), **kwargs) -> Element:
    node = Element(id=element_id, tag=tag, **kwargs)
    node.class_list.add(*classes)
    return parent.append_child(node)


def build_page_document(skip_ids=()) -> Document:
    doc = Document()
    body = doc.body
    header = _el(body, tag="header")
    _el(header, tag="h1", text="Vibe")

    form = None
    popup = None
    dropdown = _el(body, classes=("dropdown",))
    for element_id in PAGE_ELEMENT_IDS:
        if element_id in skip_ids:
            continue
        if element_id in ("dropdown-btn", "dropdown-content"):
            _el(dropdown, element_id, tag="button" if element_id == "dropdown-btn" else "div")
        elif element_id == "user-form":
            form = _el(body, element_id, tag="form")
        elif element_id in ("name", "email", "password", "confirm-password") and form is not None:
            _el(form, element_id, tag="input")
        elif element_id.endswith("-error") and form is not None:
            _el(form, element_id, tag="span")
        elif element_id == "popup-modal":
            popup = _el(body, element_id)
            _el(popup, tag="span", classes=("close",))
        elif element_id == "counter":
            _el(body, element_id, text="0", offset_width=100)
        else:
            _el(body, element_id)

    if form is not None:
        _el(form, tag="button", attributes={"type": "submit"}, text="Register")

    links = dropdown.children[1] if len(dropdown.children) > 1 else dropdown
    _el(links, tag="a", text="Option 1")
    _el(links, tag="a", text="Option 2")

    faq = _el(body, tag="section")
    _el(faq, tag="button", classes=("faq-question",), text="What is this?")
    _el(faq, tag="p", classes=("faq-answer",), offset_height=80)

    tabs = _el(body, tag="section")
    for index in (1, 2):
        _el(tabs, tag="button", classes=("tab-btn",), attributes={"data-tab": f"tab{index}"})
    for index in (1, 2):
        _el(tabs, f"tab{index}", classes=("tab-pane",))
    return doc


@pytest.fixture
def document():
    return build_page_document()


@pytest.fixture
def fast_controller():
    # 0.1x speed keeps timed reversals in the tens of milliseconds
    return AnimationController(AnimationSettings(speed=0.1))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def document_factory():
    return build_page_document
