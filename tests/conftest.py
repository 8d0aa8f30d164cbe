"""Shared fixtures for kvdag tests."""

from types import SimpleNamespace

import pytest

from kvdag import KVDAG


@pytest.fixture
def dag():
    """An empty graph."""
    return KVDAG()


@pytest.fixture
def diamond():
    """The reference fixture graph.

    v1 --> v2 --> v3
              \\-> v4
    """
    dag = KVDAG()
    v1 = dag.vertex()
    v2 = dag.vertex()
    v1.edge(v2)
    v3 = dag.vertex()
    v4 = dag.vertex()
    v2.edge(v3)
    v2.edge(v4)
    return SimpleNamespace(dag=dag, v1=v1, v2=v2, v3=v3, v4=v4)


@pytest.fixture
def hosts_graph():
    """A small inventory graph with attributes on vertices and edges.

    web01 --> webservers --> all
    db01  --> dbservers  --> all
    web01 --[monitored]--> monitoring
    """
    dag = KVDAG()
    all_hosts = dag.vertex({"dns": "10.0.0.53", "os": "linux", "net": {"mtu": 1500}})
    webservers = dag.vertex({"role": "web", "port": 80})
    dbservers = dag.vertex({"role": "db", "port": 5432})
    monitoring = dag.vertex({"agent": "node-exporter", "port": 9100})
    web01 = dag.vertex({"name": "web01"})
    db01 = dag.vertex({"name": "db01", "os": "bsd"})

    webservers.edge(all_hosts)
    dbservers.edge(all_hosts)
    web01.edge(webservers, {"rack": "A1"})
    web01.edge(monitoring, {"monitored": True})
    db01.edge(dbservers)

    return SimpleNamespace(
        dag=dag,
        all=all_hosts,
        webservers=webservers,
        dbservers=dbservers,
        monitoring=monitoring,
        web01=web01,
        db01=db01,
    )
