"""Pytest fixtures."""

import pytest
from stylehound.checkers import CheckerRegistry
from stylehound.sources.base import CollectingSink


@pytest.fixture(autouse=True)
def builtin_checkers() -> None:
  CheckerRegistry.load_all()


@pytest.fixture
def sample_patch() -> str:
  return """diff --git a/app.rb b/app.rb
index 1234567..abcdefg 100644
--- a/app.rb
+++ b/app.rb
@@ -1,4 +1,5 @@
 class App
-  def hello
+  def hello(name)
+    puts name
   end
 end
@@ -20,3 +21,3 @@ class App
 def other
-  1
+  2
 end
"""


@pytest.fixture
def sink() -> CollectingSink:
  return CollectingSink()
