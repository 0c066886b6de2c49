"""BDD tests for histogram features."""

import pytest
from pytest_bdd import scenarios

scenarios("histogram.feature")

pytestmark = pytest.mark.integration
