import pytest

SAMPLE_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<testng-results ignored="0" total="3" passed="2" failed="1" skipped="0">
  <reporter-output>
  </reporter-output>
  <suite name="Checkout Suite" started-at="2024-01-15T10:30:00Z" finished-at="2024-01-15T10:31:00Z" duration-ms="60000">
    <groups>
    </groups>
    <test name="Checkout" started-at="2024-01-15T10:30:00Z" finished-at="2024-01-15T10:31:00Z" duration-ms="60000">
      <class name="com.example.CheckoutTest">
        <test-method signature="setUp()" name="setUp" is-config="true" is_config="true" status="PASS"
                     duration-ms="5" started-at="2024-01-15T10:30:00Z" finished-at="2024-01-15T10:30:00Z">
        </test-method>
        <test-method signature="testAddToCart()" name="testAddToCart" status="PASS"
                     duration-ms="120" started-at="2024-01-15T10:30:01Z" finished-at="2024-01-15T10:30:01Z">
        </test-method>
        <test-method signature="testPay()" name="testPay" status="FAIL"
                     duration-ms="340" started-at="2024-01-15T10:30:02Z" finished-at="2024-01-15T10:30:02Z">
          <exception class="java.lang.AssertionError">
            <message>
              <![CDATA[expected [200] but found [500]]]>
            </message>
            <full-stacktrace>
              <![CDATA[java.lang.AssertionError: expected [200] but found [500]
	at com.example.CheckoutTest.testPay(CheckoutTest.java:42)]]>
            </full-stacktrace>
          </exception>
        </test-method>
      </class>
      <class name="com.example.ReceiptTest">
        <test-method signature="testReceipt()" name="testReceipt" status="PASS"
                     duration-ms="80" started-at="2024-01-15T10:30:03Z" finished-at="2024-01-15T10:30:03Z">
        </test-method>
      </class>
    </test>
  </suite>
</testng-results>
"""


@pytest.fixture
def sample_report():
    return SAMPLE_REPORT


@pytest.fixture
def sample_report_file(tmp_path):
    path = tmp_path / "testng-results.xml"
    path.write_text(SAMPLE_REPORT, encoding="utf-8")
    return path


@pytest.fixture
def xml_file(tmp_path):
    """Write XML content to a file under tmp_path and return its path."""
    def _write(content: str, name: str = "testng-results.xml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    for key in ["TESTNG_CTRF_CONFIG", "CTRF_TOOL_NAME", "CTRF_OUTPUT_PATH", "FASTMCP_PORT", "LOG_LEVEL"]:
        monkeypatch.delenv(key, raising=False)
