import pytest

from health_export_tables.tree import TreeNode

EXPORT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE HealthData [
<!ELEMENT HealthData (ExportDate,Me,(Record|Workout)*)>
]>
<HealthData locale="en_US">
 <ExportDate value="2023-01-05 10:00:00 -0500"/>
 <Me HKCharacteristicTypeIdentifierDateOfBirth="1980-02-29"
     HKCharacteristicTypeIdentifierBiologicalSex="HKBiologicalSexFemale"
     HKCharacteristicTypeIdentifierBloodType="HKBloodTypeNotSet"
     HKCharacteristicTypeIdentifierFitzpatrickSkinType="HKFitzpatrickSkinTypeNotSet"/>
 <Record type="HKQuantityTypeIdentifierHeartRate" sourceName="Watch" unit="count/min"
         creationDate="2023-01-01 12:05:00 -0500" startDate="2023-01-01 12:00:00 -0500"
         endDate="2023-01-01 12:00:00 -0500" value="62">
  <MetadataEntry key="HKMetadataKeyHeartRateMotionContext" value="0"/>
 </Record>
 <Record type="HKQuantityTypeIdentifierHeartRate" sourceName="Watch" unit="count/min"
         creationDate="2023-01-02 08:05:00 -0500" startDate="2023-01-02 08:00:00 -0500"
         endDate="2023-01-02 08:01:00 -0500" value="N/A"/>
 <Record type="HKCategoryTypeIdentifierSleepAnalysis" sourceName="Phone"
         creationDate="2023-01-02 07:00:00 -0500" startDate="2023-01-01 23:00:00 -0500"
         endDate="2023-01-02 06:30:00 -0500" value="HKCategoryValueSleepAnalysisInBed">
  <HeartRateVariabilityMetadataList>
   <InstantaneousBeatsPerMinute bpm="60" time="1:00:00.00 PM"/>
  </HeartRateVariabilityMetadataList>
 </Record>
 <Workout workoutActivityType="HKWorkoutActivityTypeRunning" duration="30"/>
</HealthData>
"""


def node(tag, children=None, **attributes):
    return TreeNode(tag=tag, attributes=attributes, children=list(children or []))


@pytest.fixture
def export_xml():
    return EXPORT_XML


@pytest.fixture
def scenario_root():
    return node('HealthData', [
        node('Me', HKCharacteristicTypeIdentifierDateOfBirth='1990-06-15'),
        node('Record', type='A', value='5'),
        node('Record', type='A', creationDate='20230101120000-0500'),
        node('Record', type='B', note='x'),
    ])


@pytest.fixture
def make_node():
    return node
