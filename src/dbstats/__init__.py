"""Cloud database system stats (dbstats).

Query CPU, connection, replication lag, IOPS and free space time series for a
database instance from whichever cloud provider hosts it.
"""

__version__ = "0.1.0"
__author__ = "Platform Engineering Team"
__license__ = "Apache-2.0"
