"""
Pytest fixtures for the chunking tests.
"""

import textwrap

import pytest

from text_chunking import ChunkingServiceConfig, ChunkingService


class FakeTokenCounter:
    """Deterministic token counter: one token per whitespace-separated word."""

    def __init__(self):
        self.calls = 0

    def count(self, text: str) -> int:
        self.calls += 1
        return len(text.split())


def ends_on_word_boundary(content: str) -> bool:
    """True if the chunk does not stop in the middle of a word."""
    if len(content) <= 1:
        return True
    last, second_last = content[-1], content[-2]
    if not last.isalpha():
        return True
    return second_last.isspace() or second_last in ".!?"


REACT_DOCS = textwrap.dedent("""
    # React Documentation

    React is a JavaScript library for building user interfaces. It was developed by Facebook and is now maintained by Meta.
    React uses a component-based architecture where you build encapsulated components that manage their own state.
    Components can be composed to create complex UIs. React also uses a virtual DOM to efficiently update the actual DOM.
    The virtual DOM is a lightweight copy of the real DOM kept in memory. When state changes, React compares the virtual DOM
    with the previous version and only updates the parts that have changed. This process is called reconciliation.

    ## Creating Components

    You can create React components as functions or classes. Function components are simpler and are the recommended approach.
    Here is an example of a simple function component that renders a greeting message.

    ## State Management

    React provides the useState hook for managing component state. State allows components to remember information between renders.
    When state changes, React will re-render the component with the new state values.

    ## Event Handling

    React components can handle events like clicks, form submissions, and keyboard input. Event handlers are functions that are
    called when specific events occur. You pass event handlers as props to elements.
""")


@pytest.fixture
def fake_counter():
    return FakeTokenCounter()


@pytest.fixture
def large_document():
    """A multi-thousand-token markdown document."""
    return REACT_DOCS * 10


@pytest.fixture
def sample_csv():
    """A realistic LinkedIn CSV export with three posts."""
    return (
        "text,createdAt (TZ=America/Los_Angeles),link,numReactions\n"
        '"Just shipped a new feature! 🚀 Excited to see how users respond to it.",'
        "2024-01-15T10:30:00,https://www.linkedin.com/posts/activity-123,42\n"
        '"Reflecting on my journey as a developer. Here\'s what I learned, in order.",'
        "2024-01-20T14:15:00,https://www.linkedin.com/posts/activity-456,128\n"
        '"Hot take: TypeScript is worth the extra setup time. Change my mind.",'
        "2024-01-25T09:00:00,https://www.linkedin.com/posts/activity-789,256\n"
    )


@pytest.fixture
def service_config(tmp_path):
    return ChunkingServiceConfig(data_dir=str(tmp_path / "chunking"))


@pytest.fixture
def service(service_config, fake_counter):
    return ChunkingService(service_config, token_counter=fake_counter)
