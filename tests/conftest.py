"""Shared test fixtures."""

import pytest

from tibco_converter.codegen import GenerationConfig
from tibco_converter.parsers import ProcessParser, SchemaParser


# ── Sample process definitions ───────────────────────────────────────────

ORDER_PROCESS_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<pd:ProcessDefinition xmlns:pd="http://xmlns.tibco.com/bw/process/2003">
    <pd:name>Processes/OrderService.process</pd:name>
    <pd:description>Receives and forwards orders</pd:description>
    <pd:activity name="ReceiveOrder">
        <pd:type>com.tibco.plugin.http.HTTPEventSource</pd:type>
        <pd:x>100</pd:x>
        <pd:y>80</pd:y>
        <config>
            <method>post</method>
            <path>/orders</path>
            <port>8080</port>
        </config>
        <pd:inputBindings>
            <mapping source="$_httpRequest/body" target="OrderRequest"/>
        </pd:inputBindings>
    </pd:activity>
    <pd:activity name="ForwardOrder">
        <pd:type>com.tibco.plugin.http.client.HttpRequestActivity</pd:type>
        <config>
            <httpMethod>PUT</httpMethod>
            <host>backend.example.com</host>
        </config>
        <pd:inputBindings>
            <mapping source="$ReceiveOrder/order" target="FulfilmentRequest"/>
        </pd:inputBindings>
    </pd:activity>
    <pd:activity name="LogOrder">
        <pd:type>com.tibco.pe.core.MapperActivity</pd:type>
    </pd:activity>
    <pd:transition>
        <pd:from>ReceiveOrder</pd:from>
        <pd:to>ForwardOrder</pd:to>
        <pd:conditionType>always</pd:conditionType>
    </pd:transition>
    <pd:transition from="ForwardOrder" to="LogOrder" type="error" condition="$_error"/>
</pd:ProcessDefinition>
"""

CUSTOMER_PROCESS_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<pd:ProcessDefinition xmlns:pd="http://xmlns.tibco.com/bw/process/2003" name="CustomerLookup">
    <activity name="GetCustomer" type="com.tibco.plugin.http.activities.HttpReceiveActivity">
        <config method="get" path="/customers/{customerId}"/>
        <inputBindings>
            <mapping source="$_queryParam/expand" target="expand"/>
        </inputBindings>
        <outputBindings>
            <mapping source="CustomerResponse" target="body"/>
        </outputBindings>
    </activity>
    <activity name="LoadCustomer" type="com.tibco.plugin.jdbc.activities.JDBCQueryActivity">
        <config sql="SELECT * FROM customer WHERE id = ?" jdbcSharedConfig="/Shared/Db.sharedjdbc"/>
    </activity>
    <transition from="GetCustomer" to="LoadCustomer"/>
</pd:ProcessDefinition>
"""

BATCH_PROCESS_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<pd:ProcessDefinition xmlns:pd="http://xmlns.tibco.com/bw/process/2003">
    <pd:name>NightlyBatch</pd:name>
    <pd:activity name="ReadInput">
        <pd:type>com.tibco.plugin.file.FileReadActivity</pd:type>
        <config>
            <fileName>/data/in.csv</fileName>
            <encoding>UTF-8</encoding>
        </config>
    </pd:activity>
    <pd:activity name="Wait">
        <pd:type>com.tibco.pe.core.SleepActivity</pd:type>
        <config>
            <IntervalInMillisec>5000</IntervalInMillisec>
        </config>
    </pd:activity>
    <pd:transition from="ReadInput" to="Wait"/>
</pd:ProcessDefinition>
"""


# ── Sample schemas ───────────────────────────────────────────────────────

ORDER_SCHEMA_XSD = """\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns:tns="http://example.com/orders"
           targetNamespace="http://example.com/orders">
    <xs:import namespace="http://example.com/common" schemaLocation="common.xsd"/>
    <xs:import namespace="http://example.com/partial"/>
    <xs:element name="Order" type="tns:OrderType"/>
    <xs:complexType name="OrderType">
        <xs:sequence>
            <xs:element name="orderId" type="xs:string">
                <xs:annotation>
                    <xs:documentation>Unique order reference</xs:documentation>
                </xs:annotation>
            </xs:element>
            <xs:element name="quantity" type="xs:int" minOccurs="0"/>
            <xs:element name="status" type="tns:StatusCode"/>
            <xs:element name="lines" type="tns:OrderLine" maxOccurs="unbounded"/>
            <xs:element name="createdAt" type="xs:dateTime"/>
        </xs:sequence>
    </xs:complexType>
    <xs:complexType name="OrderLine">
        <xs:all>
            <xs:element name="sku" type="tns:Sku"/>
            <xs:element name="price" type="xs:decimal"/>
        </xs:all>
    </xs:complexType>
    <xs:complexType name="PriorityOrder">
        <xs:complexContent>
            <xs:extension base="tns:OrderType">
                <xs:sequence>
                    <xs:element name="priority" type="xs:int" maxOccurs="3"/>
                </xs:sequence>
            </xs:extension>
        </xs:complexContent>
    </xs:complexType>
    <xs:simpleType name="StatusCode">
        <xs:restriction base="xs:string">
            <xs:enumeration value="NEW"/>
            <xs:enumeration value="SHIPPED"/>
        </xs:restriction>
    </xs:simpleType>
    <xs:simpleType name="Sku">
        <xs:restriction base="xs:string">
            <xs:pattern value="[A-Z]+"/>
            <xs:maxLength value="12"/>
        </xs:restriction>
    </xs:simpleType>
    <xs:simpleType name="Quantity">
        <xs:restriction base="xs:int">
            <xs:minInclusive value="1"/>
            <xs:maxInclusive value="99"/>
        </xs:restriction>
    </xs:simpleType>
</xs:schema>
"""

CODES_SCHEMA_XSD = """\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
    <xs:simpleType name="CountryCode">
        <xs:restriction base="xs:string">
            <xs:length value="2"/>
        </xs:restriction>
    </xs:simpleType>
</xs:schema>
"""


@pytest.fixture
def order_process():
    """Parsed ORDER_PROCESS_XML."""
    return ProcessParser().parse(ORDER_PROCESS_XML).data


@pytest.fixture
def customer_process():
    """Parsed CUSTOMER_PROCESS_XML."""
    return ProcessParser().parse(CUSTOMER_PROCESS_XML).data


@pytest.fixture
def batch_process():
    """Parsed BATCH_PROCESS_XML."""
    return ProcessParser().parse(BATCH_PROCESS_XML).data


@pytest.fixture
def order_schema():
    """Parsed ORDER_SCHEMA_XSD."""
    return SchemaParser().parse(ORDER_SCHEMA_XSD).data


@pytest.fixture
def generation_config():
    return GenerationConfig()


@pytest.fixture
def write_file(tmp_path):
    """Factory fixture: writes content to a file under tmp_path and returns the path."""
    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
